"""Allow running the API as: python -m oracle_core.api [--config path]."""

from oracle_core.api.runner import main

main()
