import runpy

from unittest.mock import patch

from common.core.config import settings


class TestServerEntrypoint:
    """Running api.main as a module serves the app with uvicorn."""

    def test_module_run_starts_uvicorn(self):
        with patch("uvicorn.run") as mock_run:
            runpy.run_module("api.main", run_name="__main__")

        mock_run.assert_called_once()
        assert mock_run.call_args.args == ("api.main:app",)
        assert mock_run.call_args.kwargs["host"] == settings.api_host
        assert mock_run.call_args.kwargs["port"] == settings.api_port
