# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0


class ManifestError(Exception):
    """Base class for every error raised while compiling a manifest."""

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(ManifestError):
    """Unknown schema version or descriptor kind, or an invalid descriptor set."""

    pass


class ManifestSourceError(ConfigurationError):
    """Raised when a manifest source file cannot be read or parsed."""

    def __init__(self, path, message):
        self.path = path
        super().__init__(f"{path}: {message}")


class EncodingOverflowError(ManifestError):
    """A value does not fit in the field it is encoded into."""

    pass


class ManifestStateError(ManifestError):
    """A manifest was passed to the wrong compile stage."""

    pass
