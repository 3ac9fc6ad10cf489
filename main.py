from dotenv import load_dotenv

load_dotenv()

import uvicorn  # noqa: E402

from salesledger.core.config import settings  # noqa: E402
from salesledger.main import app  # noqa: E402,F401

if __name__ == "__main__":
    uvicorn.run(
        "salesledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
