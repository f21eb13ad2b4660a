import pytest
from pathlib import Path
from pydantic import ValidationError

from zenith_studio.config import Config, ImageConfig, StorageConfig

def test_default_config():
    config = Config()
    assert config.gemini.text_model == "gemini-2.5-pro"
    assert config.image.backend == "gemini"
    assert config.storage.comics_key == "zenith_comics"
    assert config.storage.episodes_key == "zenith_episodes"
    assert config.episodes.failure_phase == "arc_proposal_review"
    assert config.ui.dark_mode is False

def test_config_from_yaml(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
storage:
  data_dir: custom/data
image:
  backend: proxy
  timeout: 30
ui:
  dark_mode: true
""")

    config = Config.from_yaml(config_file)
    assert str(config.storage.data_dir) == "custom/data"
    assert config.image.backend == "proxy"
    assert config.image.timeout == 30
    assert config.ui.dark_mode is True

def test_empty_yaml_gives_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    assert Config.from_yaml(config_file) == Config()

def test_config_validation():
    with pytest.raises(ValidationError):
        Config(image=ImageConfig(timeout=0))
    with pytest.raises(ValidationError):
        Config(image={"backend": "dalle"})
    with pytest.raises(ValidationError):
        Config(episodes={"failure_phase": "start"})

def test_config_to_yaml(tmp_path):
    config = Config(storage=StorageConfig(data_dir=Path("elsewhere")))
    output_file = tmp_path / "output.yaml"

    config.to_yaml(output_file)

    assert output_file.exists()
    loaded_config = Config.from_yaml(output_file)
    assert loaded_config.storage.data_dir == Path("elsewhere")

def test_env_credentials(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    monkeypatch.setenv("HUGGINGFACE_TOKEN", "hf-token")

    config = Config().with_env_credentials()
    assert config.gemini.api_key == "gem-key"
    assert config.image.proxy_token == "hf-token"

def test_env_does_not_override_explicit_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gem-key")
    config = Config(gemini={"api_key": "from-file"}).with_env_credentials()
    assert config.gemini.api_key == "from-file"
