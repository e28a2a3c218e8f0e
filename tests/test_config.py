import json

from stripsort import config


def test_defaults_when_file_missing(tmp_path):
    cfg = config.load_config(tmp_path / "missing.json")
    assert cfg == config.DEFAULT_CONFIG
    assert cfg is not config.DEFAULT_CONFIG


def test_file_then_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"algorithm": "heap", "volume": 0.3, "slice_count": 64}))
    cfg = config.load_config(path, {"algorithm": "bubble"})
    assert cfg["algorithm"] == "bubble"
    assert cfg["volume"] == 0.3
    assert cfg["slice_count"] == 64


def test_broken_json_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert config.load_config(path) == config.DEFAULT_CONFIG
    path.write_text("[1, 2]")
    assert config.load_config(path) == config.DEFAULT_CONFIG


def test_sanitize_drops_and_clamps():
    out = config.sanitize({
        "volume": 3,
        "slice_count": 100000,
        "speed": 0.01,
        "muted": "yes",
        "pitch_mode": "loudness",
        "completion_audio_mode": "chopped",
        "algorithm": "sleep",
        "colour": "red",
    })
    assert out == {
        "volume": 1.0,
        "slice_count": config.MAX_SLICES,
        "speed": config.MIN_SPEED,
        "completion_audio_mode": "chopped",
    }


def test_sanitize_rejects_bool_numbers():
    assert config.sanitize({"volume": True}) == {}


def test_non_finite_numbers_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"slice_count": NaN, "speed": Infinity, "volume": -Infinity, "octave_shift": 1e400}')
    assert config.load_config(path) == config.DEFAULT_CONFIG
    assert config.sanitize({"slice_count": 10 ** 400}) == {"slice_count": config.MAX_SLICES}


def test_save_roundtrip(tmp_path):
    path = tmp_path / "sub" / "config.json"
    cfg = dict(config.DEFAULT_CONFIG, algorithm="cycle", replay=True)
    assert config.save_config(cfg, path)
    assert config.load_config(path) == cfg


def test_effective_slice_count():
    cfg = dict(config.DEFAULT_CONFIG, slice_count=128)
    assert config.effective_slice_count(dict(cfg, algorithm="merge")) == 128
    assert config.effective_slice_count(dict(cfg, algorithm="bubble")) == 32
    assert config.effective_slice_count(dict(cfg, slice_count=2, algorithm="bogo")) == config.MIN_SLICES


def test_parse_args(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"speed": 2.0, "muted": True}))
    cfg, args = config.parse_args(["--config", str(path), "--algorithm", "quick", "--no-muted",
                                   "--slices", "50", "--image", "pic.png"])
    assert cfg["algorithm"] == "quick"
    assert cfg["muted"] is False
    assert cfg["speed"] == 2.0
    assert cfg["slice_count"] == 50
    assert args.image == "pic.png"
    assert args.audio is None
