from fridge_hack.config import DEFAULT_FALLBACK_IMAGE_URL, load_settings


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
    monkeypatch.setenv("FRIDGE_HACK_RECIPE_COUNT", "5")
    monkeypatch.setenv("FRIDGE_HACK_VIDEO_MAX_POLLS", "30")
    monkeypatch.setenv("FRIDGE_HACK_VIDEO_POLL_INTERVAL", "2.5")

    settings = load_settings()

    assert settings.api_key == "from-env"
    assert settings.recipe_count == 5
    assert settings.video_max_polls == 30
    assert settings.video_poll_interval == 2.5


def test_defaults(monkeypatch):
    for name in ("GOOGLE_API_KEY", "API_KEY", "FRIDGE_HACK_RECIPE_COUNT", "FRIDGE_HACK_VIDEO_MAX_POLLS"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.api_key == ""
    assert settings.recipe_count == 3
    assert settings.max_recipe_attempts == 3
    assert settings.video_max_polls is None
    assert settings.fallback_image_url == DEFAULT_FALLBACK_IMAGE_URL


def test_api_key_falls_back_to_generic_name(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "generic")
    assert load_settings().api_key == "generic"
