from devops_helper.api.environment import redact_environment
from devops_helper.config import get_settings


async def test_info_defaults(api_client, signals) -> None:
    resp = await api_client.get("/info")
    assert resp.status_code == 200
    assert resp.json() == {
        "application": "devops-helper",
        "version": "local",
        "environment": None,
        "pod": None,
        "node": None,
    }


async def test_info_reports_identity_from_signals(api_client, signals) -> None:
    signals.values.update(
        {
            "APP_VERSION": "1.4.2",
            "APP_ENVIRONMENT": "staging",
            "HOSTNAME": "devops-helper-7d9f-abcde",
            "NODE_NAME": "node-3",
        }
    )
    payload = (await api_client.get("/info")).json()
    assert payload["version"] == "1.4.2"
    assert payload["environment"] == "staging"
    assert payload["pod"] == "devops-helper-7d9f-abcde"
    assert payload["node"] == "node-3"


async def test_info_environment_variable_name_is_configurable(api_client, signals, monkeypatch) -> None:
    monkeypatch.setenv("ENVIRONMENT_VARIABLE", "ASPNETCORE_ENVIRONMENT")
    get_settings.cache_clear()
    signals.values["ASPNETCORE_ENVIRONMENT"] = "Production"

    payload = (await api_client.get("/info")).json()
    assert payload["environment"] == "Production"


async def test_config_omits_secret_keys(api_client, signals) -> None:
    signals.values.update(
        {
            "PATH": "/usr/bin",
            "DB_SECRET": "hunter2",
            "SECRET_KEY": "abc",
            "MY_SECRET_TOKEN": "def",
        }
    )
    resp = await api_client.get("/config")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload == {"PATH": "/usr/bin"}
    assert not any("SECRET" in key for key in payload)


async def test_config_filter_is_case_sensitive_by_default(api_client, signals) -> None:
    signals.values.update({"db_secret": "leaks", "DB_SECRET": "hidden"})
    payload = (await api_client.get("/config")).json()
    assert payload == {"db_secret": "leaks"}


async def test_config_filter_can_ignore_case(api_client, signals, monkeypatch) -> None:
    monkeypatch.setenv("CONFIG_REDACT_IGNORE_CASE", "true")
    get_settings.cache_clear()
    signals.values.update({"db_secret": "leaks", "Api_Secret": "x", "HOME": "/root"})

    payload = (await api_client.get("/config")).json()
    assert payload == {"HOME": "/root"}


async def test_config_reflects_process_environment(api_client, monkeypatch) -> None:
    monkeypatch.setenv("DEVOPS_HELPER_PROBE", "visible")
    monkeypatch.setenv("PROBE_SECRET", "hidden")

    payload = (await api_client.get("/config")).json()
    assert payload["DEVOPS_HELPER_PROBE"] == "visible"
    assert "PROBE_SECRET" not in payload


def test_redact_environment_returns_values_untouched() -> None:
    env = {"A": "  spaced  ", "B": "", "SECRETS": "x"}
    assert redact_environment(env) == {"A": "  spaced  ", "B": ""}


async def test_info_keeps_empty_version_instead_of_default(api_client, signals) -> None:
    signals.values["APP_VERSION"] = ""
    payload = (await api_client.get("/info")).json()
    assert payload["version"] == ""
