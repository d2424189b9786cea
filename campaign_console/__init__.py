"""
Campaign Console.

Client-side manager for campaign records served by a remote API:
- Search-keyed list cache with stale-response suppression
- Create / edit / delete dialogs driven by a single state machine
- Revalidation after every mutation instead of local patching
- Read-only tweet list with per-row delete callbacks
"""

__version__ = "0.1.0"
