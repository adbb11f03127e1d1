# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log


class DictUtils:
    def override_dict(original_dict, overrides_dict, separator="."):
        """Apply overrides whose keys are paths into nested dictionaries.

        "module_descriptor.vendor" overrides original_dict["module_descriptor"]["vendor"],
        creating the intermediate dictionaries when they don't exist yet.
        """
        for key, value in overrides_dict.items():
            path = key.split(separator)
            current = original_dict
            for component in path[:-1]:
                if component not in current or current[component] is None:
                    current[component] = {}
                if not isinstance(current[component], dict):
                    raise ValueError(
                        f"Cannot override {key}: {component} is not a mapping ({current[component]!r})"
                    )
                current = current[component]
            log.debug(f"Overriding {key}: {current.get(path[-1])} -> {value}")
            current[path[-1]] = value

    def create_dict(overrides_list):
        attributes_map = {}
        for override in overrides_list:
            if "=" not in override:
                raise ValueError(f"Invalid override (expected KEY=VALUE): {override}")

            # Split at the first '='
            name_value_pair = override.split("=", 1)

            attribute_name = name_value_pair[0].strip()
            attribute_value = name_value_pair[1]

            if attribute_value.lower() == "true":
                attribute_value = True
            elif attribute_value.lower() == "false":
                attribute_value = False
            elif attribute_value.isnumeric():
                attribute_value = int(attribute_value)
            elif attribute_value.lower().startswith("0x"):
                attribute_value = int(attribute_value, 16)
            elif (
                len(attribute_value) > 1 and attribute_value[0] == "[" and attribute_value[-1] == "]"
            ):
                attribute_value = attribute_value[1:-1].split(",")
                attribute_value = [x.strip() for x in attribute_value]

            attributes_map[attribute_name] = attribute_value
            log.debug(f"Command line overriding {attribute_name} with {attribute_value}.")

        return attributes_map
