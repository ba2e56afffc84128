"""
Caller-side face hint for the CLI.

The engine never detects faces; this helper lets a caller derive the optional
face center from MediaPipe Face Mesh before calling it.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import mediapipe as mp

from edgepass.core.models import FaceCenter

NOSE_TIP_IDX = 1
FOREHEAD_IDX = 10
CHIN_IDX = 152


class FaceNotFound(RuntimeError):
    pass


def center_from_landmarks(landmarks: Sequence, width: int, height: int) -> FaceCenter:
    """
    Face center in pixels from normalized Face Mesh landmarks.

    x follows the nose tip; y is midway between the forehead and chin landmarks.
    """
    nose = landmarks[NOSE_TIP_IDX]
    forehead = landmarks[FOREHEAD_IDX]
    chin = landmarks[CHIN_IDX]

    # Basic sanity: chin below forehead
    if chin.y <= forehead.y:
        raise FaceNotFound("Face landmarks looked inconsistent. Try a different image.")

    return FaceCenter(x=nose.x * width, y=(forehead.y + chin.y) / 2.0 * height)


def detect_face_center(img_rgb: np.ndarray) -> FaceCenter:
    """Run Face Mesh on an RGB array and return the face center in its pixel space."""
    mp_face_mesh = mp.solutions.face_mesh

    with mp_face_mesh.FaceMesh(
        static_image_mode=True,
        refine_landmarks=True,
        max_num_faces=1,
        min_detection_confidence=0.5,
    ) as face_mesh:
        results = face_mesh.process(np.ascontiguousarray(img_rgb))

    if not results.multi_face_landmarks:
        raise FaceNotFound("No face detected. Try a clearer, front-facing photo with good lighting.")

    h, w = img_rgb.shape[:2]
    return center_from_landmarks(results.multi_face_landmarks[0].landmark, w, h)
