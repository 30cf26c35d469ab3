"""Allow ``python -m resolve_libpatch``."""

from resolve_libpatch.cli import main

if __name__ == "__main__":
    main(prog_name="resolve-libpatch")
