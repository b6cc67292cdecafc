"""Development entry point.

    APP_ENV=development python app.py

In production serve ``app:app`` with a WSGI server instead.
"""
from src.timeclock.timeclock.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config.get("DEBUG", False))
