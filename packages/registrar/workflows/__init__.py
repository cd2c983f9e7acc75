"""Interactive desks that drive the stores through the terminal boundary."""

from .base import Desk, Prompter
from .feast_flow import FeastDesk
from .registration_flow import RegistrationDesk

__all__ = ["Desk", "Prompter", "FeastDesk", "RegistrationDesk"]
