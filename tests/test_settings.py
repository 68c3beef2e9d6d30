import importlib


def test_settings_loads(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "42:AAAbbb")
    monkeypatch.setenv("REDIS_URL", "localhost:6379/0")
    monkeypatch.setenv("ADMIN_IDS", "123, 456")

    settings_module = importlib.import_module("wordguard.config.settings")
    importlib.reload(settings_module)
    s = settings_module.Settings(_env_file=None)
    assert s.bot_token == "42:AAAbbb"
    assert s.redis_url == "redis://localhost:6379/0"
    assert s.admin_ids == [123, 456]
    assert s.smtp is None


def test_nested_group_policy_from_env(monkeypatch):
    monkeypatch.setenv(
        "MODERATION__GROUPS",
        '[{"group_id": -100, "detection_methods": ["local", "ai", "local"], "mute_minutes": 2}]',
    )
    monkeypatch.setenv("MODERATION__DEFAULT_TRIGGER_THRESHOLD", "5")

    settings_module = importlib.import_module("wordguard.config.settings")
    s = settings_module.Settings(_env_file=None)

    policy = s.moderation.resolve(-100)
    assert policy is not None
    assert policy.methods == ("local", "ai")
    assert policy.trigger_threshold == 5
    assert policy.mute_seconds == 120
    assert policy.ai_threshold == 0.6
    assert policy.window_seconds == 300
    assert s.moderation.resolve(-200) is None


def test_group_policy_overrides_defaults():
    from wordguard.config.models import GroupPolicy, ModerationConfig

    config = ModerationConfig(
        default_window_minutes=60,
        default_context_msg_count=7,
        groups=[
            GroupPolicy(
                group_id=7,
                enable=False,
                ai_threshold=0.9,
                check_probability=0.5,
                show_censored_word=False,
                trigger_window_minutes=2,
                context_msg_count=4,
            )
        ],
    )
    policy = config.resolve(7)
    assert policy.enabled is False
    assert policy.ai_threshold == 0.9
    assert policy.check_probability == 0.5
    assert policy.show_censored_word is False
    assert policy.window_seconds == 120
    assert policy.context_msg_count == 4
    assert policy.mute_minutes == 10


def test_group_policy_falls_back_to_global_defaults():
    from wordguard.config.models import GroupPolicy, ModerationConfig

    config = ModerationConfig(
        default_window_minutes=60,
        default_context_msg_count=7,
        default_mute_minutes=15,
        default_trigger_threshold=4,
        groups=[GroupPolicy(group_id=1)],
    )
    policy = config.resolve(1)
    assert policy.window_seconds == 3600
    assert policy.context_msg_count == 7
    assert policy.mute_seconds == 900
    assert policy.trigger_threshold == 4
