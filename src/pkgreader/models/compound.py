"""Values of compound control fields."""

from pydantic import BaseModel


class Version(BaseModel):
    """A version split as ``[epoch:]upstream[-revision]``."""

    epoch: int = 0
    version: str = ""
    revision: str | None = None

    def __str__(self) -> str:
        text = f"{self.epoch}:{self.version}" if self.epoch else self.version
        if self.revision is not None:
            text = f"{text}-{self.revision}"
        return text


class Conffile(BaseModel):
    """A configuration file shipped by a package, with its recorded checksum."""

    path: str
    md5sum: str

    def __str__(self) -> str:
        return f"{self.path} {self.md5sum}"
