"""Server entry point: ``uvicorn clipvault.main:app`` or the ``clipvault`` script."""
import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from clipvault.app import create_app  # noqa: E402

app = create_app()


def run():
    uvicorn.run(
        "clipvault.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
