# SPDX-License-Identifier: MIT

from did.initialize import initialize
from did.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
