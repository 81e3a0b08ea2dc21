# models.py
from dataclasses import asdict, dataclass
from enum import Enum


class DisplayPage(Enum):
    NORMAL = "normal"
    INSTALL = "install"
    INSTALL_DONE = "install_done"
    REDIRECT_HOME = "redirect_home"


@dataclass(frozen=True)
class Bookmark:
    id: int
    url: str

    @classmethod
    def from_row(cls, row):
        return cls(id=row["id"], url=row["url"])

    def to_dict(self):
        return asdict(self)
