# Copyright 2026 MacroLex Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for MacroLex documentation."""

project = "MacroLex"
author = "MacroLex Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
