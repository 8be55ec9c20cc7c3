"""Allow ``python -m gecho``."""
from gecho.main import main

main()
