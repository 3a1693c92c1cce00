# SPDX-License-Identifier: MIT

from did import main

main()
