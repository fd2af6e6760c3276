from pathlib import Path

from main import CalibrationMapDemo


def test_demo_rejects_invalid_precision_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("CALMAP_SUMMARY_PRECISION", "-1")
    demo = CalibrationMapDemo(str(tmp_path / "config.yaml"))
    assert not demo.initialize()
    assert demo.calibration_map is None
