# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for the key/value settings table:
#
#   settings(key text primary key, value jsonb)
#
# Keys used by the provider resolver:
#   defaultProviderPreference, modelOverridesGroq,
#   modelOverridesVertex, modelOverridesAzure
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   values = SupabaseClient.fetch_settings(["defaultProviderPreference"])
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

SETTINGS_TABLE = "settings"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed and how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        values = SupabaseClient.fetch_settings([
            "defaultProviderPreference",
            "modelOverridesGroq",
        ])
        preference = values.get("defaultProviderPreference", "groq")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_settings(cls, keys: Iterable[str]) -> dict[str, Any]:
        """
        Fetch values from the settings table.

        Args:
            keys: Setting keys to read

        Returns:
            Dict of key -> decoded JSON value. Keys without a row are absent.

        Raises:
            SupabaseClientError: If client creation or the query fails
        """
        client = cls.get_client()
        keys = list(keys)

        try:
            response = (
                client.table(SETTINGS_TABLE)
                .select("key, value")
                .in_("key", keys)
                .execute()
            )

            values = {row["key"]: row.get("value") for row in (response.data or [])}
            logger.debug(f"Fetched {len(values)} of {len(keys)} settings")
            return values

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch settings: {e}",
                code="FETCH_SETTINGS_FAILED",
                suggestion="Check that the settings table exists and is readable",
                details={"keys": keys}
            )

    @classmethod
    def upsert_settings(cls, values: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Insert or update settings rows.

        Args:
            values: Dict of key -> JSON-serializable value (None stores null)

        Returns:
            The written rows

        Raises:
            SupabaseClientError: If the upsert fails
        """
        client = cls.get_client()
        rows = [{"key": key, "value": value} for key, value in values.items()]

        try:
            response = (
                client.table(SETTINGS_TABLE)
                .upsert(rows, on_conflict="key")
                .execute()
            )

            logger.info(f"Updated settings: {', '.join(values)}")
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update settings: {e}",
                code="UPSERT_SETTINGS_FAILED",
                suggestion="Check that the service role key can write to the settings table",
                details={"keys": list(values)}
            )

    @classmethod
    def ping(cls) -> None:
        """
        Run a trivial query against the settings table.

        Raises:
            SupabaseClientError: If the database is unreachable
        """
        client = cls.get_client()

        try:
            client.table(SETTINGS_TABLE).select("key").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Settings table is unreachable: {e}",
                code="PING_FAILED",
                suggestion="Check SUPABASE_URL and that the database is running",
            )
