#!/usr/bin/env python3
"""
Startup script for the Organization Workspace API

Set INIT_DB=true to create the tables (without dropping existing ones)
and the default admin account before the server starts.
"""

import os
import uvicorn
from app.config.settings import settings

def main():
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"

    if os.getenv("INIT_DB", "false").lower() == "true":
        from create_tables import create_tables
        create_tables(drop_existing=False)

    print("Starting Organization Workspace API...")
    print(f"Listening on {host}:{port} (reload={reload})")
    print(f"Database: {'PostgreSQL' if settings.is_postgres() else settings.DATABASE_URL}")
    print(f"Deadline scheduler: {'on' if settings.SCHEDULER['enabled'] else 'off'}")
    print("=" * 50)

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    main()
