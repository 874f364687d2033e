"""
Run the API with uvicorn: ``python -m checkday``
"""
import uvicorn

from .config import settings

if __name__ == "__main__":
    uvicorn.run("checkday.main:app", host=settings.host, port=settings.port, reload=settings.debug)
