from dotenv import load_dotenv

load_dotenv()

from klip import create_app
from klip.extensions import db

api = create_app()

def init_db():
    """Ensure DB tables exist."""
    db.create_all()

# Run DB bootstrap once at startup
with api.app_context():
    init_db()

if __name__ == "__main__":
    api.run(debug=True)
