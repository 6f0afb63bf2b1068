# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""FillerInfo - Anime filler episode lookup."""

from fillerinfo.__about__ import __version__

__all__ = ["__version__"]
