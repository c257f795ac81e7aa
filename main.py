#===============================================================================
#  Hermes  |  Keyboard Launcher Overlay
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A keyboard-driven launcher overlay. A JSON command file describes a tree of
#  key-bound actions and submenus; parts of the tree can be generated from
#  live system state (background services, a snippets file, workspace files).
#  Supports:
#    - Browsing the command tree by single-key shortcuts
#    - Searching every action by title or submenu path
#    - Launching installed applications (recently used first)
#    - Switching to an open window through the window manager CLI
#
#  Files
#  -----
#    ~/.config/hermes/settings.json    -> tool paths and locations
#    ~/.config/hermes/commands.json    -> the command tree
#    ~/.cache/hermes/apps.json         -> application cache
#    ~/.cache/app-icons/               -> extracted application icons
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project uses third-party libraries (e.g., PySide6) which are licensed
#  separately by their respective authors. Ensure compliance with their
#  license terms when distributing this software.
#===============================================================================

import sys

from hermes.app import run


if __name__ == "__main__":
    sys.exit(run())
