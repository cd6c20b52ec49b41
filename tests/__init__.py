# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Leasecast test suite.

Unit tests per component under `unit/`, full projection runs under
`integration/`.
"""
