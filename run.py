"""Gateway entry point.

Starts the Flask development server or is used by gunicorn in production.

Usage:
    Development:  python run.py
    Production:   gunicorn --bind 0.0.0.0:5218 --workers 2 --threads 4 run:app
"""
from app import create_app

app = create_app()

if __name__ == "__main__":
    settings = app.config["SETTINGS"]
    app.run(host="0.0.0.0", port=settings.PORT, debug=settings.FLASK_DEBUG)
