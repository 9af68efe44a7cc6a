from typing import TYPE_CHECKING  # pragma: no cover

if TYPE_CHECKING:
    from typing import Dict, List, Sequence, Tuple, Union

    Number = Union[int, float]
    AnyKey = Union[str, int]
    AnyValueType = Union[str, Number, bool, None]

    SettingsType = Dict[str, AnyValueType]
    AnySettingsContainer = Union[SettingsType, None]

    WordList = List[str]
    WordListType = Union[Sequence[str], Tuple[str, ...]]
    NameWords = Tuple[str, str, str]
