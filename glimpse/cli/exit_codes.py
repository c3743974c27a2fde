# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Process exit codes of the glimpse CLI.

A deploy job publishes only on SUCCESS and must be able to tell a post that
failed its checks from a broken setup.
"""

SUCCESS: int = 0
# Bad invocation: no subcommand, a post path that doesn't exist, output outside the site root.
USER_ERROR: int = 1
# glimpse.yaml missing, unparsable, or rejected by the schema.
CONFIG_ERROR: int = 2
# Anything unexpected; the traceback is in the log.
RUNTIME_ERROR: int = 3
# The checks ran and found at least one error.
VALIDATION_ERROR: int = 4
