"""Static kana tables for drills."""

from .content import DrillItem

# Hiragana to romaji by group. Extra comma-separated values are accepted
# alternatives; the first one is the canonical reading.
HIRAGANA = {
    'base': {
        'name': 'Hiragana',
        'items': {
            'あ': 'a', 'い': 'i', 'う': 'u', 'え': 'e', 'お': 'o',
            'か': 'ka', 'き': 'ki', 'く': 'ku', 'け': 'ke', 'こ': 'ko',
            'さ': 'sa', 'し': 'shi,si', 'す': 'su', 'せ': 'se', 'そ': 'so',
            'た': 'ta', 'ち': 'chi,ti', 'つ': 'tsu,tu', 'て': 'te', 'と': 'to',
            'な': 'na', 'に': 'ni', 'ぬ': 'nu', 'ね': 'ne', 'の': 'no',
            'は': 'ha', 'ひ': 'hi', 'ふ': 'fu,hu', 'へ': 'he', 'ほ': 'ho',
            'ま': 'ma', 'み': 'mi', 'む': 'mu', 'め': 'me', 'も': 'mo',
            'や': 'ya', 'ゆ': 'yu', 'よ': 'yo',
            'ら': 'ra', 'り': 'ri', 'る': 'ru', 'れ': 're', 'ろ': 'ro',
            'わ': 'wa', 'を': 'wo,o', 'ん': 'n,nn'
        }
    },
    'dakuon': {
        'name': 'Hiragana (dakuon)',
        'items': {
            'が': 'ga', 'ぎ': 'gi', 'ぐ': 'gu', 'げ': 'ge', 'ご': 'go',
            'ざ': 'za', 'じ': 'ji,zi', 'ず': 'zu', 'ぜ': 'ze', 'ぞ': 'zo',
            'だ': 'da', 'ぢ': 'di,ji', 'づ': 'du,zu', 'で': 'de', 'ど': 'do',
            'ば': 'ba', 'び': 'bi', 'ぶ': 'bu', 'べ': 'be', 'ぼ': 'bo',
            'ぱ': 'pa', 'ぴ': 'pi', 'ぷ': 'pu', 'ぺ': 'pe', 'ぽ': 'po'
        }
    },
    'yoon': {
        'name': 'Hiragana (yoon)',
        'items': {
            'きゃ': 'kya', 'きゅ': 'kyu', 'きょ': 'kyo',
            'しゃ': 'sha,sya', 'しゅ': 'shu,syu', 'しょ': 'sho,syo',
            'ちゃ': 'cha,tya', 'ちゅ': 'chu,tyu', 'ちょ': 'cho,tyo',
            'にゃ': 'nya', 'にゅ': 'nyu', 'にょ': 'nyo',
            'ひゃ': 'hya', 'ひゅ': 'hyu', 'ひょ': 'hyo',
            'みゃ': 'mya', 'みゅ': 'myu', 'みょ': 'myo',
            'りゃ': 'rya', 'りゅ': 'ryu', 'りょ': 'ryo',
            'ぎゃ': 'gya', 'ぎゅ': 'gyu', 'ぎょ': 'gyo',
            'じゃ': 'ja,zya', 'じゅ': 'ju,zyu', 'じょ': 'jo,zyo',
            'びゃ': 'bya', 'びゅ': 'byu', 'びょ': 'byo',
            'ぴゃ': 'pya', 'ぴゅ': 'pyu', 'ぴょ': 'pyo'
        }
    }
}

# Katakana occupies the hiragana block shifted by 0x60
_KATAKANA_OFFSET = 0x60


def _to_katakana(text: str) -> str:
    return ''.join(chr(ord(c) + _KATAKANA_OFFSET) for c in text)


KATAKANA = {
    group: {
        'name': data['name'].replace('Hiragana', 'Katakana'),
        'items': {_to_katakana(glyph): romaji for glyph, romaji in data['items'].items()}
    }
    for group, data in HIRAGANA.items()
}

# Flat lookup: "hiragana", "hiragana-dakuon", "katakana-yoon", ...
KANA_GROUPS = {}
for _script, _table in (('hiragana', HIRAGANA), ('katakana', KATAKANA)):
    for _group, _data in _table.items():
        _name = _script if _group == 'base' else f"{_script}-{_group}"
        KANA_GROUPS[_name] = _data

GROUP_DISPLAY_NAMES = {group: data['name'] for group, data in KANA_GROUPS.items()}


def get_all_groups() -> list[str]:
    """Get list of all kana group keys."""
    return list(KANA_GROUPS.keys())


def kana_items(group_names: list[str]) -> list[DrillItem]:
    """Build drill items for the given kana groups, in table order.

    Raises KeyError for an unknown group.
    """
    items = []
    for group in dict.fromkeys(group_names):
        if group not in KANA_GROUPS:
            raise KeyError(f"Unknown kana group: {group}")
        for glyph, romaji in KANA_GROUPS[group]['items'].items():
            meanings = [r.strip() for r in romaji.split(',')]
            items.append(DrillItem(glyph, meanings))
    return items
