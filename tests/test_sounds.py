import wave

import assets.sounds as sounds
from assets.sounds import CuePlayer, write_tone


def test_write_tone(tmp_path):
    path = write_tone(tmp_path / "cue" / "tone.wav")
    with wave.open(str(path), "rb") as fh:
        assert fh.getnchannels() == 1
        assert fh.getsampwidth() == 2
        assert fh.getframerate() == sounds.CUE_SAMPLE_RATE
        assert fh.getnframes() == int(sounds.CUE_SAMPLE_RATE * sounds.CUE_DURATION)


class DummySound:
    def __init__(self):
        self.plays = 0

    def stop(self):
        pass

    def play(self):
        self.plays += 1


def test_cue_player_loads_once_and_plays(tmp_path, monkeypatch):
    sound = DummySound()
    loads = []

    def fake_load(path):
        loads.append(path)
        return sound

    monkeypatch.setattr(sounds.SoundLoader, "load", staticmethod(fake_load))
    player = CuePlayer(tmp_path / "rest_done.wav")
    player.play_cue()
    player.play_cue()
    assert sound.plays == 2
    assert len(loads) == 1
    assert (tmp_path / "rest_done.wav").exists()


def test_cue_player_swallows_failures(tmp_path, monkeypatch):
    def broken_load(path):
        raise RuntimeError("no audio provider")

    monkeypatch.setattr(sounds.SoundLoader, "load", staticmethod(broken_load))
    CuePlayer(tmp_path / "rest_done.wav").play_cue()


def test_cue_player_without_audio_provider(tmp_path, monkeypatch):
    monkeypatch.setattr(sounds.SoundLoader, "load", staticmethod(lambda path: None))
    CuePlayer(tmp_path / "rest_done.wav").play_cue()
