from shortlinks.exceptions import ExhaustionError
from shortlinks.manager import ManagerOptions, ShortLinksManager, create_manager
from shortlinks.models import ShortLinkModel


__all__ = [
    'ExhaustionError',
    'ManagerOptions',
    'ShortLinksManager',
    'create_manager',
    'ShortLinkModel',
]
