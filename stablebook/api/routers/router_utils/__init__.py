"""Shared helpers for API routers."""

from stablebook.api.routers.router_utils.error_handling import handle_record_errors

__all__ = ["handle_record_errors"]
