import os


def _optional_int(value):
    if value in (None, ''):
        return None
    return int(value)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Seed for question assignment and turn order shuffles. Unset = unseeded.
    RANDOM_SEED = _optional_int(os.environ.get('RANDOM_SEED'))
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
