# lumina/entities/user.py
from enum import Enum


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    EMPRESA = "EMPRESA"
    FREELANCER = "FREELANCER"
