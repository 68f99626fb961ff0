from shortlinks.manager.id_generator import generate_random_id, generate_unique_ids
from shortlinks.manager.link_manager import ManagerOptions, ShortLinksManager, create_manager


__all__ = [
    'generate_random_id',
    'generate_unique_ids',
    'ManagerOptions',
    'ShortLinksManager',
    'create_manager',
]
