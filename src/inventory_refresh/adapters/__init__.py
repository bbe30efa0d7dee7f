"""Adapters binding inventory refresh to concrete stores."""
