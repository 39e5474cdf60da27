from __future__ import annotations

import pytest

import tax_chat.main as main_module
from tax_chat.config.app_config import get_app_config
from tax_chat.config.llm_config import get_llm_config


@pytest.fixture
def fresh_app(monkeypatch: pytest.MonkeyPatch):
    get_app_config.cache_clear()
    get_llm_config.cache_clear()
    monkeypatch.setattr(main_module, "_app", None)
    yield
    get_app_config.cache_clear()
    get_llm_config.cache_clear()


def test_module_app_is_built_once(fresh_app: None) -> None:
    assert main_module._app is None

    first = main_module.app

    assert main_module.app is first
    assert main_module.get_app() is first


def test_run_serves_the_module_app(monkeypatch: pytest.MonkeyPatch, fresh_app: None) -> None:
    served = []
    monkeypatch.setattr(
        main_module.uvicorn, "run", lambda application, **kwargs: served.append((application, kwargs))
    )

    main_module.run()

    assert len(served) == 1
    application, kwargs = served[0]
    assert application is main_module.app
    assert kwargs["port"] == 3001
    assert kwargs["host"] == "0.0.0.0"


def test_run_exits_on_invalid_configuration(monkeypatch: pytest.MonkeyPatch, fresh_app: None) -> None:
    monkeypatch.setenv("APP_ENV", "qa")
    monkeypatch.setattr(main_module.uvicorn, "run", lambda *args, **kwargs: pytest.fail("server started"))

    with pytest.raises(SystemExit) as excinfo:
        main_module.run()

    assert excinfo.value.code == 1
    assert main_module._app is None
