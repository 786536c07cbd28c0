import os

class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///klip.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # Keep accented crag names readable in API output
    JSON_AS_ASCII = False

    # Excel import: sheets to ignore entirely, and the text that marks a
    # stray header row in the route column
    IMPORT_SKIP_SHEETS = [
        s.strip()
        for s in os.getenv("IMPORT_SKIP_SHEETS", "Sheet2").split(",")
        if s.strip()
    ]
    IMPORT_HEADER_SENTINEL = os.getenv("IMPORT_HEADER_SENTINEL", "VOIE")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
