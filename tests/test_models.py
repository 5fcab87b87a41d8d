import json
from notestash.models import Note


def test_as_json():
    note = Note('groceries', 'eggs\nmilk\n')
    assert note.as_json() == {'name': 'groceries', 'text': 'eggs\nmilk\n'}
    assert json.loads(json.dumps(note.as_json())) == note.as_json()
