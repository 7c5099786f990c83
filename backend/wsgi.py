"""
Entry point for the druginfo backend.
Run with: python wsgi.py
"""

from druginfo.config import Config
from druginfo.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=Config.HOST, port=Config.PORT, debug=app.config.get("DEBUG", False))
