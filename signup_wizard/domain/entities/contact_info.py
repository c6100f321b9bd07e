from dataclasses import dataclass


@dataclass(frozen=True)
class ContactInfo:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    gate_location: str
    gate_code: str = ""
