SUPPORTED_AST_VERSIONS: tuple[int, ...] = (50, 60, 70, 80, 85, 90, 100)

DEFAULT_AST_VERSION = 100

# First version emitting AST_NULLSAFE_PROP / AST_NULLSAFE_METHOD_CALL.
NULLSAFE_AST_VERSION = 80


class UnsupportedVersionError(ValueError):
    """Raised when a conversion is requested for an AST version outside SUPPORTED_AST_VERSIONS."""

    def __init__(self, version: object) -> None:
        supported = ", ".join(str(v) for v in SUPPORTED_AST_VERSIONS)
        super().__init__(f"Unexpected version: want {supported}, got {version}")
        self.version = version


def normalize_version(version: int | str | None) -> int:
    if version is None:
        return DEFAULT_AST_VERSION
    try:
        resolved = int(str(version).strip())
    except ValueError:
        raise UnsupportedVersionError(version) from None
    if resolved not in SUPPORTED_AST_VERSIONS:
        raise UnsupportedVersionError(version)
    return resolved
