# app/config/settings.py
# Application settings read from the environment

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Settings:
    """Runtime configuration for the API"""

    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./workspace.db')

    # JWT settings
    AUTH = {
        'secret_key': os.getenv('SECRET_KEY', 'change-me-in-production'),
        'algorithm': os.getenv('ALGORITHM', 'HS256'),
        'access_token_expire_minutes': int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24)),
    }

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            'CORS_ORIGINS',
            'http://localhost:3000,http://localhost:3001,http://127.0.0.1:3000'
        ).split(',')
        if origin.strip()
    ]

    SCHEDULER = {
        'enabled': _env_flag('SCHEDULER_ENABLED', 'true'),
        'overdue_check_minutes': int(os.getenv('OVERDUE_CHECK_MINUTES', 15)),
    }

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Organization access levels run from 1 (viewer) to 5 (full admin)
    ACCESS_LEVELS = {
        'min': 1,
        'max': 5,
        'default': 2,
        'manage': int(os.getenv('MANAGE_ACCESS_LEVEL', 4)),
        'admin': int(os.getenv('ADMIN_ACCESS_LEVEL', 5)),
    }

    STAFF_ROLES = ['Owner', 'Admin', 'Manager', 'Member', 'Viewer']

    @classmethod
    def is_postgres(cls) -> bool:
        return cls.DATABASE_URL.lower().startswith('postgres')

    @classmethod
    def is_valid_staff_role(cls, role: str) -> bool:
        return role in cls.STAFF_ROLES

    @classmethod
    def is_valid_access_level(cls, level: int) -> bool:
        return cls.ACCESS_LEVELS['min'] <= level <= cls.ACCESS_LEVELS['max']


settings = Settings()
