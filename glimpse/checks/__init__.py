# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Publishing checks.

Each check takes a loaded Post plus the config and returns a list of
Findings. Checks never raise for problems in the post itself; a broken post
is a finding, not an exception. The pipeline module runs them all and tallies
the result.
"""
