"""Public interface for the ``registrar`` package.

This module re-exports the stores, records, validators and views that make
up the validated record store. There is no runtime logic here.
"""

from .api import FeastBook, TrekBook, open_feast_book, open_trek_book
from .config import Settings, load_settings
from .errors import DuplicateFieldError, NotFoundError, PersistenceError, RegistrarError
from .fees import order_cost, registration_fee
from .models import Customer, FeastMenu, FeastOrder, Mountain, Registration, Statistic
from .persistence import ListDump, ReferenceLoad, load_feast_menus, load_mountains, read_delimited
from .store import RecordStore, customer_store, order_store, registration_store
from .validation import FieldValidation
from .views import build_statistics

__all__ = [
    # Wiring
    "open_trek_book",
    "open_feast_book",
    "TrekBook",
    "FeastBook",
    "Settings",
    "load_settings",
    # Errors
    "RegistrarError",
    "DuplicateFieldError",
    "NotFoundError",
    "PersistenceError",
    # Rules
    "registration_fee",
    "order_cost",
    "FieldValidation",
    # Models
    "Registration",
    "Customer",
    "FeastOrder",
    "Mountain",
    "FeastMenu",
    "Statistic",
    # Stores and persistence
    "RecordStore",
    "registration_store",
    "customer_store",
    "order_store",
    "ListDump",
    "ReferenceLoad",
    "read_delimited",
    "load_mountains",
    "load_feast_menus",
    # Views
    "build_statistics",
]
