"""Per-operation authorization for privileged (OSSL) script functions."""
