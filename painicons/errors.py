"""Exceptions raised by the icon conversion steps."""


class IconError(Exception):
    """Base class for every fatal icon conversion problem."""


class MissingSourceError(IconError):
    """An identity has no usable source images at all."""

    def __init__(self, identity, source_dir):
        self.identity = identity
        self.source_dir = source_dir
        super().__init__(f"No source images found for '{identity}' in {source_dir}")


class SourceDimensionError(IconError):
    """A source raster is not the size its filename declares."""

    def __init__(self, path, declared, actual):
        self.path = path
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"{path}: filename declares {declared}x{declared} but image is "
            f"{actual[0]}x{actual[1]}" if actual else f"{path}: not a readable PNG image"
        )


class ContainerFormatError(IconError):
    """Raised when an icon container cannot be parsed."""


class ExternalToolError(IconError):
    """The platform packaging tool ran but reported failure."""

    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() if stderr else "no output"
        super().__init__(f"{cmd[0]} exited with status {returncode}: {detail}")
