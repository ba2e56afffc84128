from __future__ import annotations

from typing import Any, List, Union

import numpy as np

from edgepass.core.standards import PassportStandard, resolve, standard_from_id
from edgepass.validation.report import RuleResult, ValidationReport

WHITE_THRESHOLD = 245
MIN_WHITE_RATIO = 0.95


def _as_rgb(img: np.ndarray) -> np.ndarray:
    arr = np.asarray(img)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.shape[-1] == 4:
        arr = arr[:, :, :3]
    return arr.astype(np.uint8)


def _near_white_ratio_border(img_rgb: np.ndarray, margin: int, thr: int = WHITE_THRESHOLD) -> float:
    h, w, _ = img_rgb.shape
    m = max(1, min(margin, h // 2, w // 2))
    border = np.concatenate(
        [
            img_rgb[:m, :, :].reshape(-1, 3),
            img_rgb[h - m:, :, :].reshape(-1, 3),
            img_rgb[:, :m, :].reshape(-1, 3),
            img_rgb[:, w - m:, :].reshape(-1, 3),
        ],
        axis=0,
    )
    if not border.size:
        return 0.0
    return float(np.all(border >= thr, axis=1).mean())


def _lighting_metrics(img_rgb: np.ndarray) -> dict[str, Any]:
    gray = (0.2126 * img_rgb[:, :, 0] + 0.7152 * img_rgb[:, :, 1] + 0.0722 * img_rgb[:, :, 2]).astype(np.float32)
    return {
        "luma_mean": float(gray.mean()),
        "luma_std": float(gray.std()),
        "dark_clip": float((gray <= 10).mean()),
        "bright_clip": float((gray >= 245).mean()),
    }


def _size_rule(w: int, h: int, expected_w: int, expected_h: int) -> RuleResult:
    ok = (w, h) == (expected_w, expected_h)
    return RuleResult(
        rule_id="Size",
        passed=ok,
        message=f"{w}x{h} pixels (expected {expected_w}x{expected_h}).",
        metrics={"width": w, "height": h, "expected": [expected_w, expected_h]},
    )


def _background_rule(img_rgb: np.ndarray) -> RuleResult:
    h, w = img_rgb.shape[:2]
    margin = max(10, int(0.05 * min(h, w)))
    white_ratio = _near_white_ratio_border(img_rgb, margin=margin)
    ok = white_ratio >= MIN_WHITE_RATIO
    msg = f"Near-white border pixels: {white_ratio*100:.1f}% (target ≥ {MIN_WHITE_RATIO*100:.0f}%)."
    if not ok:
        msg += " Enable background removal or retake against a plain wall."
    return RuleResult(
        rule_id="Background whiteness",
        passed=ok,
        message=msg,
        metrics={"white_ratio": white_ratio, "margin_px": margin, "threshold": WHITE_THRESHOLD},
    )


def _lighting_rule(img_rgb: np.ndarray) -> RuleResult:
    m = _lighting_metrics(img_rgb)
    ok_mean = 60.0 <= m["luma_mean"] <= 210.0
    ok_clip = m["dark_clip"] <= 0.02 and m["bright_clip"] <= 0.02
    ok_std = 15.0 <= m["luma_std"] <= 90.0
    ok = ok_mean and ok_clip and ok_std

    msg = (
        f"Mean {m['luma_mean']:.0f}, Std {m['luma_std']:.0f}, "
        f"Clip(D/B) {m['dark_clip']*100:.1f}%/{m['bright_clip']*100:.1f}%."
    )
    if not ok:
        msg += " Avoid harsh shadows/backlight; use even front lighting."
    return RuleResult(rule_id="Lighting", passed=ok, message=msg, metrics=m)


def validate_output(img: np.ndarray, standard: Union[PassportStandard, int]) -> ValidationReport:
    """
    Check a generated photo against its standard.

    Rules are heuristics meant as user guidance, not an official acceptance decision.
    Lighting is measured only inside the frame's center so the white background
    does not count as clipping.
    """
    if not isinstance(standard, PassportStandard):
        standard = standard_from_id(standard)
    config = resolve(standard)
    img_rgb = _as_rgb(img)
    h, w = img_rgb.shape[:2]

    results: List[RuleResult] = [
        _size_rule(w, h, config.target_width, config.target_height),
        _background_rule(img_rgb),
    ]

    cy0, cy1 = h // 4, h - h // 4
    cx0, cx1 = w // 4, w - w // 4
    center = img_rgb[cy0:cy1, cx0:cx1] if (cy1 > cy0 and cx1 > cx0) else img_rgb
    results.append(_lighting_rule(center))

    return ValidationReport(standard=standard.name, results=results)


def format_report_text(report: ValidationReport) -> str:
    lines: List[str] = []
    lines.append(f"EdgePass Validation Report ({report.standard})")
    lines.append("-" * 32)
    lines.append(f"Overall: {'PASS' if report.passed else 'FAIL'}")
    lines.append("")
    for r in report.results:
        mark = "✅" if r.passed else "❌"
        lines.append(f"{mark} {r.rule_id}: {r.message}")
    return "\n".join(lines)
