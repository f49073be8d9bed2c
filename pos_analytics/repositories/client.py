"""
Supabase client initialization.

This module contains *only* the database connection setup. The client is created on
first use so that importing the repositories (and the engine) does not require
credentials.

Environment variables required:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from supabase import Client, create_client

# Look for .env in the project root
env_path = Path(__file__).parent.parent.parent / ".env"

_client: Optional[Client] = None


def get_supabase() -> Client:
    """Return the process-wide Supabase client, creating it on first call."""

    global _client
    if _client is not None:
        return _client

    load_dotenv(dotenv_path=env_path)

    # Read credentials from the environment to avoid hard-coding secrets in code.
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")

    if not url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )
    if not key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    _client = create_client(url, key)
    return _client


__all__ = ["get_supabase"]
