"""
User Entity

Account record for anyone who signs in. Credentials live with the
upstream identity provider; this service only stores profile and role.
"""

from dataclasses import dataclass, field

from healthapp.core.domain import Email, Entity, ValidationException, generate_uuid_str

from ..value_objects import UserRole


@dataclass
class User(Entity[str]):
    id: str | None = field(default_factory=generate_uuid_str)
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: UserRole = UserRole.PATIENT
    is_active: bool = True

    def __post_init__(self):
        try:
            self.email = str(Email(self.email))
        except ValueError as e:
            raise ValidationException(str(e), field="email") from e

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()
