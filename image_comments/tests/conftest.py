"""
Test fixtures and utilities for image_comments tests.

Provides reusable fixtures for frames, sessions and test images.
"""

import pytest
import numpy as np


@pytest.fixture
def square_frame():
    """A 100x100 frame, so pixel values read directly as percentages."""
    from image_comments.core.annotation import Frame

    return Frame(width=100, height=100)


@pytest.fixture
def wide_frame():
    """A non-square frame to catch axis mix-ups."""
    from image_comments.core.annotation import Frame

    return Frame(width=640, height=480)


@pytest.fixture
def session():
    """Create an AnnotationSession in point mode."""
    from image_comments.core.annotation import AnnotationSession

    return AnnotationSession(mode="point")


@pytest.fixture
def box_session():
    """Create an AnnotationSession in box mode."""
    from image_comments.core.annotation import AnnotationSession

    return AnnotationSession(mode="box")


@pytest.fixture
def event_log(session, box_session):
    """Record every event emitted by both session fixtures."""
    from image_comments.core.annotation import EventType

    received = []
    for s in (session, box_session):
        for event_type in EventType:
            s.events.on(event_type, received.append)
    return received


@pytest.fixture
def test_image():
    """Create a blank RGB test image."""
    return np.zeros((100, 200, 3), dtype=np.uint8)
