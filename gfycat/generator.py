"""
Generates random names composed of two adjectives and one animal.

.. code-block:: python

    from gfycat.generator import Order, create

    gfy = create()
    gfy.generate_name()                             # 'happyblueotter'
    gfy.generate_name_order(Order.ANIMAL_FIRST)     # 'otterbluehappy'
    gfy.generate_name_fmt("%s-%s-%s")               # 'happy-blue-otter'
"""
import logging
from typing import TYPE_CHECKING

from gfycat.base import Constants, ExtendedEnum
from gfycat.cache import LocalCache
from gfycat.config import get_settings, get_seed
from gfycat.exceptions import EmptyWordListError
from gfycat.source import LockedRandomSource

if TYPE_CHECKING:
    from typing import Any, Optional, Tuple, Union

    from gfycat.fetch import AssetFetcher
    from gfycat.typedefs import AnySettingsContainer, NameWords, WordListType

LOGGER = logging.getLogger(__name__)


class WordListFile(Constants):
    ADJECTIVES = "adjectives.txt"
    ANIMALS = "animals.txt"


class Order(ExtendedEnum):
    """
    Position at which the animal appears in the generated name.
    """
    ANIMAL_FIRST = 1
    ANIMAL_SECOND = 2
    ANIMAL_THIRD = 3


class Gfycat(object):
    """
    Name generator drawing from immutable adjective and animal word lists.

    Instances can be shared between threads since the only mutable state is the synchronized random source.
    """

    def __init__(self, adjectives, animals, random_source=None):
        # type: (WordListType, WordListType, Optional[LockedRandomSource]) -> None
        self._adjectives = tuple(adjectives)
        self._animals = tuple(animals)
        if not self._adjectives:
            raise EmptyWordListError("Cannot generate names from an empty list of adjectives.")
        if not self._animals:
            raise EmptyWordListError("Cannot generate names from an empty list of animals.")
        self._random = random_source or LockedRandomSource()

    def __repr__(self):
        # type: () -> str
        return f"{type(self).__name__}(adjectives={len(self._adjectives)}, animals={len(self._animals)})"

    @property
    def adjectives(self):
        # type: () -> Tuple[str, ...]
        return self._adjectives

    @property
    def animals(self):
        # type: () -> Tuple[str, ...]
        return self._animals

    @classmethod
    def create(cls, settings=None, **kwargs):
        # type: (Optional[AnySettingsContainer], Any) -> Gfycat
        return create(settings, **kwargs)

    def _generate_words(self, order):
        # type: (Union[Order, Any]) -> NameWords
        adj1 = self._adjectives[self._random.randbelow(len(self._adjectives))]
        adj2 = self._adjectives[self._random.randbelow(len(self._adjectives))]
        animal = self._animals[self._random.randbelow(len(self._animals))]
        order = Order.get(order, Order.ANIMAL_THIRD)
        if order == Order.ANIMAL_FIRST:
            return animal, adj2, adj1
        if order == Order.ANIMAL_SECOND:
            return adj1, animal, adj2
        return adj1, adj2, animal

    def generate_name(self):
        # type: () -> str
        """
        Generates a name as adjective, adjective and animal concatenated without separator.
        """
        return "".join(self._generate_words(Order.ANIMAL_THIRD))

    def generate_name_order(self, order):
        # type: (Union[Order, Any]) -> str
        """
        Generates a name with the animal placed according to the specified order.

        Arrangement of the drawn adjectives ``a`` and ``b`` with animal ``c`` is:

        - :attr:`Order.ANIMAL_FIRST`: ``c b a``
        - :attr:`Order.ANIMAL_SECOND`: ``a c b``
        - :attr:`Order.ANIMAL_THIRD` or any unrecognized value: ``a b c``
        """
        return "".join(self._generate_words(order))

    def generate_name_fmt(self, fmt):
        # type: (str) -> str
        """
        Generates a name with user specific formatting.

        The format must contain three and only three ``%s`` placeholders. For example, ``"%s_%s_%s"`` produces
        a name such as ``aaa_bbb_ccc``. Invalid formats raise the :class:`TypeError` of the ``%`` operator.
        """
        return fmt % self._generate_words(Order.ANIMAL_THIRD)

    def generate_name_order_fmt(self, fmt, order):
        # type: (str, Union[Order, Any]) -> str
        """
        Generates a name with user specific formatting and animal order.

        .. seealso::
            - :meth:`generate_name_fmt`
            - :meth:`generate_name_order`
        """
        return fmt % self._generate_words(order)


def create(settings=None,           # type: Optional[AnySettingsContainer]
           fetcher=None,            # type: Optional[AssetFetcher]
           cache=None,              # type: Optional[LocalCache]
           random_source=None,      # type: Optional[LockedRandomSource]
           ):                       # type: (...) -> Gfycat
    """
    Creates a name generator from the adjectives and animals word lists.

    Word lists are read from the local cache, and are retrieved from the assets host beforehand only if missing.
    Unless a random source is provided or ``gfycat.seed`` is defined, the generator is seeded from the current time.

    :param settings: configuration overrides (see :func:`gfycat.config.get_settings`).
    :param fetcher: retrieval method of missing word lists (default according to settings).
    :param cache: local cache of the word lists (default according to settings, using the fetcher).
    :param random_source: random source to employ for drawing words.
    :raises NetworkFetchError: if a missing word list could not be retrieved.
    :raises FilesystemError: if a word list could not be written to or read from the local cache.
    :raises EmptyWordListError: if a loaded word list contains no word.
    """
    settings = get_settings(settings)
    cache = cache or LocalCache(fetcher=fetcher, settings=settings)
    adjectives = cache.load_words(WordListFile.ADJECTIVES)
    animals = cache.load_words(WordListFile.ANIMALS)
    if random_source is None:
        random_source = LockedRandomSource(get_seed(settings))
    gfy = Gfycat(adjectives, animals, random_source=random_source)
    LOGGER.debug("Created %r from cache [%s]", gfy, cache.cache_dir)
    return gfy
