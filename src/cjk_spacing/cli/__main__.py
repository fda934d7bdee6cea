"""
Entry point for ``python -m cjk_spacing.cli``.

See cjk_spacing.cli.spacing for the available options.
"""

import sys

from cjk_spacing.cli.spacing import main

if __name__ == "__main__":
    sys.exit(main())
