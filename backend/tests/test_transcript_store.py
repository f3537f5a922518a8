from config import settings
from core.transcript_store import Transcript, TranscriptStore, seed_turns


def test_missing_key_yields_seed_turns(store):
    turns = store.load_turns("chat_history_v1:new")
    assert [t.role for t in turns] == ["system", "assistant"]
    assert settings.ASSISTANT_TITLE in turns[0].content
    assert turns[1].content == settings.ASSISTANT_GREETING


def test_turns_restored_verbatim(tmp_path):
    url = f"sqlite:///{tmp_path / 'h.db'}"
    first = TranscriptStore(url)
    transcript = Transcript(first, "k")
    transcript.append("user", "install vscode")
    transcript.append("assistant", "Pick a version")
    first.close()

    second = TranscriptStore(url)
    restored = Transcript(second, "k")
    assert restored.turns == transcript.turns
    assert [t.content for t in restored.visible_turns()][-2:] == ["install vscode", "Pick a version"]
    second.close()


def test_corrupt_history_resets_to_system_turn(store):
    store.put("k", "{not json")
    turns = store.load_turns("k")
    assert [t.role for t in turns] == ["system"]
    # the reset is persisted
    assert store.load_turns("k") == turns


def test_wrong_shape_counts_as_corrupt(store):
    store.put("k", '[{"role": "robot", "content": "hi"}]')
    assert [t.role for t in store.load_turns("k")] == ["system"]


def test_reset_restores_seed(store):
    transcript = Transcript(store, "k")
    transcript.append("user", "hello")
    transcript.reset()
    assert list(transcript.turns) == seed_turns()
    assert store.load_turns("k") == seed_turns()


def test_system_turns_hidden(store):
    transcript = Transcript(store, "k")
    assert all(t.role != "system" for t in transcript.visible_turns())
