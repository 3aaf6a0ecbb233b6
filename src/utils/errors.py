"""Error handling utilities."""

from typing import Optional


class ShowcaseAdminError(Exception):
    """Base exception for the showcase admin backend."""
    pass


class SupabaseError(ShowcaseAdminError):
    """Supabase operation error."""
    pass


class SchemaMissingError(SupabaseError):
    """Supabase reported that a table does not exist (setup script not run)."""

    def __init__(self, table: str, message: Optional[str] = None):
        self.table = table
        super().__init__(
            message
            or f'The "{table}" table does not exist. Run the setup script in the Supabase dashboard.'
        )


class FormValidationError(ShowcaseAdminError):
    """Required fields were empty at submit time."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))


class AuthenticationError(ShowcaseAdminError):
    """Sign-in or registration failed."""
    pass
