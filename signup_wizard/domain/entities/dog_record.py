from dataclasses import dataclass


@dataclass(frozen=True)
class DogRecord:
    name: str = ""
    breed: str = ""
    is_safe: str = "yes"  # "yes" | "no"
    comments: str = ""
