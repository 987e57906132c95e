from __future__ import annotations
from pathlib import Path
from typing import Optional, Union

from .log import info, ok

DEFAULT_ENV = """\
# AUTO-GENERATED FILE.
# YOU CAN EDIT/ADD MORE KEYS AND ITS VALUE.
# Generated by envgen.

APP_NAME="{app_name}"
APP_ENV=local
APP_KEY=null
APP_DEBUG=true
APP_URL=http://localhost

# Redis
REDIS_HOST=127.0.0.1
REDIS_PASSWORD=null
REDIS_PORT=6379

# Mail
MAIL_DRIVER=smtp
MAIL_HOST=smtp.example.com
MAIL_PORT=587
MAIL_USERNAME=
MAIL_PASSWORD=null
MAIL_ENCRYPTION=tls

# AWS
AWS_ACCESS_KEY_ID=
AWS_SECRET_ACCESS_KEY=
AWS_DEFAULT_REGION=us-east-1
AWS_BUCKET=
"""

def create_env_file(path: Union[str, Path] = ".env", app_name: Optional[str] = None) -> bool:
    """Write the default env file unless *path* already exists.

    ``APP_NAME`` defaults to the name of the current directory.
    """
    p = Path(path)
    if p.exists():
        info(f"The {p} file already exists.")
        return False
    name = app_name or Path.cwd().name or "unknown_project"
    p.write_text(DEFAULT_ENV.format(app_name=name), encoding="utf-8")
    ok(f"Created {p} file with default content.")
    return True
