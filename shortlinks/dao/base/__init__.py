from shortlinks.dao.base.short_link_base_dao import ShortLinkBaseDAO
from shortlinks.dao.base.cache_base_dao import CacheBaseDAO


__all__ = [
    'ShortLinkBaseDAO',
    'CacheBaseDAO',
]
