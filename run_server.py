"""
Start the invoicer API with uvicorn.

Requires INVOICER_SECRET_KEY; see invoicer/app/core/settings.py for the
other INVOICER_* variables.
"""

import uvicorn

from invoicer.app.core.settings import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "invoicer.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
