"""
Server entry point tests
"""

import pytest
from unittest.mock import patch


class TestMain:
    """app.main startup checks"""

    def test_unreachable_database_exits_cleanly(self, app):
        """Schema creation failing is reported like a failed connection"""
        import app as app_module
        from services.material_store import EXTENSION_KEY

        store = app.extensions[EXTENSION_KEY]
        with patch.object(app_module, 'create_app', return_value=app), \
                patch.object(app_module.db, 'create_all', side_effect=RuntimeError('unreachable')), \
                patch.object(store, 'open') as mock_open, \
                patch.object(app, 'run') as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                app_module.main()

        assert exc_info.value.code == 1
        mock_open.assert_not_called()
        mock_run.assert_not_called()

    def test_failed_open_exits_cleanly(self, app):
        import app as app_module
        from services.material_store import EXTENSION_KEY

        store = app.extensions[EXTENSION_KEY]
        with patch.object(app_module, 'create_app', return_value=app), \
                patch.object(store, 'open', side_effect=RuntimeError('refused')), \
                patch.object(app, 'run') as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                app_module.main()

        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    def test_starts_when_database_is_reachable(self, app):
        import app as app_module
        from services.material_store import EXTENSION_KEY

        store = app.extensions[EXTENSION_KEY]
        with patch.object(app_module, 'create_app', return_value=app), \
                patch.object(app_module, '_install_shutdown_handlers') as mock_handlers, \
                patch.object(store, 'open') as mock_open, \
                patch.object(app, 'run') as mock_run:
            app_module.main()

        mock_open.assert_called_once_with()
        mock_handlers.assert_called_once_with(app, store)
        mock_run.assert_called_once()
