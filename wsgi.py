from config import settings
from app import create_app

app = create_app()

if __name__ == '__main__':
    app.run(port=settings.APP_PORT, debug=True)
