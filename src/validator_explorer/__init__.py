# src/validator_explorer/__init__.py
# SPDX-License-Identifier: MIT

__version__ = "0.1.0"
