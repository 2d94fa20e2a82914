# SPDX-License-Identifier: MIT

from growsteps.initialize import initialize
from growsteps.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
