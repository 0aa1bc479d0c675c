# app/main.py
import uvicorn

from app.api import create_app
from app.utils.settings import load_settings

settings = load_settings()
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
