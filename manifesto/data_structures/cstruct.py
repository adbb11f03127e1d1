# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""Packed C struct layouts for binary descriptors."""

from manifesto.errors import ConfigurationError, EncodingOverflowError

field_type_to_size_in_bytes = {
    "uint8_t": 1,
    "uint16_t": 2,
    "uint32_t": 4,
    "uint64_t": 8,
}

# struct module format characters, little-endian is selected by the caller.
size_in_bytes_to_struct_format = {
    1: "B",
    2: "H",
    4: "I",
    8: "Q",
}


class CStructField:
    """Represents a single unsigned integer field in a packed C struct."""

    def __init__(self, name, field_type):
        if field_type not in field_type_to_size_in_bytes:
            raise ConfigurationError(
                f"Invalid type {field_type} for field {name}. Supported types are: {list(field_type_to_size_in_bytes.keys())}"
            )
        self.name = name
        self.field_type = field_type
        self.size_in_bytes = field_type_to_size_in_bytes[field_type]
        self.struct_format = size_in_bytes_to_struct_format[self.size_in_bytes]
        self.offset = None

    def __str__(self) -> str:
        return f"CStructField(name={self.name}, field_type={self.field_type}, offset={self.offset})"

    def max_value(self):
        return (1 << (self.size_in_bytes * 8)) - 1

    def check_value(self, value, where):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigurationError(
                f"{where}: field {self.name} must be an integer, got {value!r}"
            )
        if value < 0 or value > self.max_value():
            raise EncodingOverflowError(
                f"{where}: value {value} of field {self.name} does not fit in {self.field_type}"
            )


class CStruct:
    """A packed C struct: fields follow each other with no alignment padding."""

    def __init__(self, name, fields_data):
        self.name = name
        self.fields = []
        self.size_in_bytes = 0
        self._parse_fields(fields_data)
        self._calculate_offsets_and_size()

    def _parse_fields(self, fields_data):
        """Parse field data from YAML into CStructField objects."""
        if not isinstance(fields_data, dict) or len(fields_data) == 0:
            raise ConfigurationError(f"Struct {self.name} has no fields")
        for field_name, field_type in fields_data.items():
            self.fields.append(CStructField(field_name, str(field_type).strip()))

    def _calculate_offsets_and_size(self):
        current_offset = 0
        for field in self.fields:
            field.offset = current_offset
            current_offset += field.size_in_bytes

        self.size_in_bytes = current_offset

    def get_field_names(self):
        return [field.name for field in self.fields]

    def get_field(self, field_name):
        for field in self.fields:
            if field.name == field_name:
                return field
        raise ConfigurationError(f"Struct {self.name} has no field {field_name}")

    def get_struct_format(self):
        """Little-endian struct module format string covering every field."""
        return "<" + "".join(field.struct_format for field in self.fields)
