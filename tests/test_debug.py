from unittest.mock import Mock

from gpslogger.common.debug import DebugRecorder


def _recorder(store):
    recorder = DebugRecorder(store)
    recorder.logger = Mock()
    return recorder


def test_silent_when_debug_off(store):
    recorder = _recorder(store)

    recorder.record("Test.run", "value", 1)

    assert recorder.enabled is False
    recorder.logger.info.assert_not_called()


def test_records_when_debug_on(store):
    store.set("isDebugMode", True)
    recorder = _recorder(store)

    recorder.record("SocialPostAction.run", "postTweet", {"id": "1"})

    recorder.logger.info.assert_called_once()
    message = recorder.logger.info.call_args.args[0]
    assert message == "[DEBUG] SocialPostAction.run postTweet={'id': '1'}"
    assert recorder.logger.info.call_args.kwargs["extra"]["key"] == "postTweet"


def test_record_never_raises(store):
    store.set("isDebugMode", True)
    recorder = _recorder(store)
    recorder.logger.info.side_effect = RuntimeError("handler broken")

    recorder.record("Test.run", "value")

    recorder.logger.exception.assert_called_once()
