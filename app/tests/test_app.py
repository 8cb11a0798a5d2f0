"""Tests for the Streamlit page wiring (run headless with AppTest)."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = str(Path(__file__).parent.parent / "app.py")


@pytest.fixture()
def app_with_image():
    from picture_editor.session import EditingSession

    rng = np.random.default_rng(8)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["session"] = EditingSession(rng.integers(0, 256, (24, 24, 3), dtype=np.uint8))
    return at.run()


def _button(at, label):
    return next(button for button in at.button if button.label == label)


class TestEdgeDetectionButton:
    def test_disabled_right_after_apply(self, app_with_image):
        at = _button(app_with_image, "Apply Edge Detector").click().run()

        assert at.session_state["session"].edges_applied
        assert _button(at, "Apply Edge Detector").disabled
        assert any("already been applied" in info.value for info in at.info)

    def test_enabled_again_after_revert(self, app_with_image):
        at = _button(app_with_image, "Apply Edge Detector").click().run()
        at = _button(at, "↺ Revert to Original").click().run()

        assert not at.session_state["session"].edges_applied
        assert not _button(at, "Apply Edge Detector").disabled
        assert not any("already been applied" in info.value for info in at.info)

    def test_filter_buttons_follow_filter_table(self, app_with_image):
        from picture_editor.filters.pixel import FILTERS

        labels = [button.label for button in app_with_image.button]
        assert labels[:3] == list(FILTERS)
