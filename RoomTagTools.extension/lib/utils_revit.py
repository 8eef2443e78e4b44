# -*- coding: utf-8 -*-

import traceback

from pyrevit import DB
from pyrevit import forms
from pyrevit import revit
from pyrevit import script


DEFAULT_TITLE = 'Room Tag Tools'


def get_logger():
    return script.get_logger()


def _safe_log(logger_method, msg):
    try:
        logger_method(msg)
    except UnicodeEncodeError:
        try:
            # Fallback to repr which escapes non-ascii
            logger_method(repr(msg))
        except Exception:
            logger_method("<Log message encoding failed>")
    except Exception:
        pass


def alert(msg, title=DEFAULT_TITLE, warn_icon=True):
    try:
        forms.alert(msg, title=title, warn_icon=warn_icon)
    except Exception:
        # UI may be unavailable (batch runs)
        _safe_log(get_logger().warning, msg)


def ask_yes_no(msg, title=DEFAULT_TITLE, default=True):
    """Yes/No prompt. Closing the dialog counts as No."""
    try:
        res = forms.alert(msg, title=title, yes=True, no=True, warn_icon=False)
    except Exception:
        _safe_log(get_logger().warning, 'Prompt unavailable, using default: {0}'.format(default))
        return default
    return bool(res)


def log_exception(prefix='Error'):
    logger = get_logger()
    _safe_log(logger.error, prefix)
    _safe_log(logger.error, traceback.format_exc())


def safe_str(obj):
    try:
        return str(obj)
    except Exception:
        try:
            return repr(obj)
        except Exception:
            return '<unprintable>'


def ensure_symbol_active(doc, family_symbol):
    """Activate a FamilySymbol if needed. Returns True when it ends up active."""
    if family_symbol is None:
        return False
    if family_symbol.IsActive:
        return True
    family_symbol.Activate()
    doc.Regenerate()
    return bool(family_symbol.IsActive)


def tx(name, doc=None):
    """Transaction context manager.

    Commits on normal exit, rolls back when the block raises and re-raises.

    Usage:
        with tx('Tag All Rooms', doc=doc):
            ...
    """
    doc = doc or revit.doc
    t = DB.Transaction(doc, name)

    class _Tx(object):
        def __enter__(self):
            t.Start()
            return t

        def __exit__(self, exc_type, exc, tb):
            if exc_type:
                rb = getattr(t, 'RollBack', None) or getattr(t, 'Rollback', None)
                if rb:
                    try:
                        rb()
                    except Exception:
                        _safe_log(get_logger().error, 'Rollback failed: {0}'.format(safe_str(name)))
                return False

            try:
                t.Commit()
            except Exception:
                rb = getattr(t, 'RollBack', None) or getattr(t, 'Rollback', None)
                if rb:
                    try:
                        rb()
                    except Exception:
                        _safe_log(get_logger().error, 'Rollback failed: {0}'.format(safe_str(name)))
                raise
            return False

    return _Tx()
