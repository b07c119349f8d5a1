"""Authorization for OSSL functions (threat ceiling + per-function overrides).

Administrators control, per function:
- nothing: the global threat level ceiling decides
- Allow_<function> = true|false
- Allow_<function> = role tokens (PARCEL_OWNER, ESTATE_MANAGER, GOD, ...) and owner UUIDs
- Creators_<function> = script creator UUIDs
"""
