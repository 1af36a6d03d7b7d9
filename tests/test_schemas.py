from shell.schemas import ShellConfig


def test_shell_config_json_round_trip() -> None:
    config = ShellConfig(data_file="kv.txt", prompt="kv> ", log_level="debug")

    restored = ShellConfig.from_json(config.to_json())

    assert restored == config
    assert restored.log_level == "DEBUG"
