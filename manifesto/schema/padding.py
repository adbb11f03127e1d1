# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import enum

from manifesto.errors import ConfigurationError

STRING_ALIGNMENT_IN_BYTES = 4


@enum.unique
class PaddingPolicy(enum.Enum):
    # Appends (raw_length % 4) zero bytes. The payload is only 4 byte aligned
    # for raw lengths of 0 and 2 modulo 4.
    PAD_OWN_REMAINDER = "pad_own_remainder"
    # Pads until the fixed fields plus the string are a multiple of 4 bytes.
    ALIGN_DESCRIPTOR = "align_descriptor"

    @classmethod
    def get_policy(cls, name: str) -> "PaddingPolicy":
        for policy in cls:
            if policy.value == name:
                return policy
        raise ConfigurationError(
            f"Invalid padding policy: {name}. Valid policies are: {[p.value for p in cls]}"
        )

    def get_pad_length(self, base_size_in_bytes: int, raw_length: int) -> int:
        if self is PaddingPolicy.PAD_OWN_REMAINDER:
            return raw_length % STRING_ALIGNMENT_IN_BYTES

        remainder = (base_size_in_bytes + raw_length) % STRING_ALIGNMENT_IN_BYTES
        if remainder == 0:
            return 0
        return STRING_ALIGNMENT_IN_BYTES - remainder

    def pad(self, base_size_in_bytes: int, raw_bytes: bytes) -> bytes:
        return raw_bytes + b"\x00" * self.get_pad_length(base_size_in_bytes, len(raw_bytes))
