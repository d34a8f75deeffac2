# cam02.py – CIECAM02 JCh and CAM02-UCS J'a'b' for the D65 sRGB viewing setup
#   - transforms come from colour-science; this module fixes the viewing setup
#   - adapting luminance L_A = 64/π/5 cd/m², background Y_b = 20, "Average" surround
#   - XYZ is expected on the 0…100 scale

from __future__ import annotations

import math

import numpy as np
from colour import (
    CAM02UCS_to_JMh_CIECAM02,
    CAM_Specification_CIECAM02,
    CIECAM02_to_XYZ,
    JMh_CIECAM02_to_CAM02UCS,
    XYZ_to_CIECAM02,
)
from colour.appearance import VIEWING_CONDITIONS_CIECAM02
from colour.colorimetry import CCS_ILLUMINANTS
from colour.models import xy_to_XYZ

XYZ_W = xy_to_XYZ(CCS_ILLUMINANTS["CIE 1931 2 Degree Standard Observer"]["D65"]) * 100
L_A = 64.0 / math.pi / 5.0
Y_B = 20.0
SURROUND = VIEWING_CONDITIONS_CIECAM02["Average"]

VIEWING = {"XYZ_w": XYZ_W, "L_A": L_A, "Y_b": Y_B, "surround": SURROUND}

# the inverse model divides by chroma; grays are sent through with a hair of it
_MIN_CHROMA = 1e-9


def xyz_to_jch(xyz) -> np.ndarray:
    """XYZ (0…100) → CIECAM02 lightness J, chroma C, hue angle h (degrees)."""
    spec = XYZ_to_CIECAM02(np.asarray(xyz, dtype=np.float64), **VIEWING)
    return np.array([spec.J, spec.C, spec.h], dtype=np.float64)


def jch_to_xyz(jch) -> np.ndarray:
    """CIECAM02 J, C, h → XYZ (0…100).  J ≤ 0 is black."""
    J, C, h = (float(v) for v in jch)
    if J <= 0.0:
        return np.zeros(3)
    spec = CAM_Specification_CIECAM02(J=J, C=max(C, _MIN_CHROMA), h=h)
    return np.asarray(CIECAM02_to_XYZ(spec, **VIEWING), dtype=np.float64)


def xyz_to_jab(xyz) -> np.ndarray:
    """XYZ (0…100) → CAM02-UCS J', a', b'."""
    spec = XYZ_to_CIECAM02(np.asarray(xyz, dtype=np.float64), **VIEWING)
    JMh = np.array([spec.J, spec.M, spec.h], dtype=np.float64)
    return np.asarray(JMh_CIECAM02_to_CAM02UCS(JMh), dtype=np.float64)


def jab_to_xyz(jab) -> np.ndarray:
    """CAM02-UCS J', a', b' → XYZ (0…100).  J' ≤ 0 is black."""
    J_p, a_p, b_p = (float(v) for v in jab)
    if J_p <= 0.0:
        return np.zeros(3)
    J, M, h = (float(v) for v in CAM02UCS_to_JMh_CIECAM02(np.array([J_p, a_p, b_p])))
    spec = CAM_Specification_CIECAM02(J=J, M=max(M, _MIN_CHROMA), h=h)
    return np.asarray(CIECAM02_to_XYZ(spec, **VIEWING), dtype=np.float64)


__all__ = [
    "xyz_to_jch",
    "jch_to_xyz",
    "xyz_to_jab",
    "jab_to_xyz",
    "VIEWING",
    "XYZ_W",
]
