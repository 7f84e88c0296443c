# tests/test_bot.py
from unittest.mock import MagicMock

from forecast_bot import bot
from forecast_bot.cache import PipelineState
from forecast_bot.conditions import CurrentConditions
from forecast_bot.pipeline import PipelineResult


def test_format_report_found_with_conditions():
    result = PipelineResult(
        forecast="Sunny.",
        state=PipelineState(),
        found=True,
        conditions=CurrentConditions(text="Clear", humidity=20),
    )
    text = bot.format_report("Los Angeles", result)
    assert text == "Forecast for Los Angeles:\nSunny.\n\nCurrently: Clear\nHumidity: 20%"


def test_format_report_fallback_is_plain():
    result = PipelineResult(forecast='Unable to find results for "X"!', state=PipelineState())
    assert bot.format_report("X", result) == 'Unable to find results for "X"!'


def test_process_forecast_request_replies_via_ctx():
    orchestrator = MagicMock()
    orchestrator.lookup.return_value = PipelineResult(
        forecast="Sunny.", state=PipelineState(), found=True
    )
    ctx = MagicMock()
    fake_bot = MagicMock()

    bot.process_forecast_request(fake_bot, orchestrator, "aa11", "Boston", ctx=ctx)

    orchestrator.lookup.assert_called_once_with("Boston", enrich=False)
    ctx.reply.assert_called_once_with("Forecast for Boston:\nSunny.")
    fake_bot.send.assert_not_called()


def test_send_scheduled_reports_sends_enriched_report_to_each_subscriber():
    fake_bot = MagicMock()
    fake_bot.storage.get.return_value = {"Boston": ["aa11", "bb22"]}
    orchestrator = MagicMock()
    orchestrator.lookup.return_value = PipelineResult(
        forecast="Snow.", state=PipelineState(), found=True
    )

    bot.send_scheduled_reports(fake_bot, orchestrator)

    orchestrator.lookup.assert_called_once_with("Boston", enrich=True)
    assert [c.args for c in fake_bot.send.call_args_list] == [
        ("aa11", "Forecast for Boston:\nSnow."),
        ("bb22", "Forecast for Boston:\nSnow."),
    ]


def test_parse_args_defaults():
    config = bot.parse_args([])
    assert config.storage_path == "data/forecast"
    assert config.schedule is None
    assert config.enrich is False


def test_parse_args_schedule_and_enrich():
    config = bot.parse_args(["--schedule", "0 7 * * *", "--enrich", "--debug"])
    assert config.schedule == "0 7 * * *"
    assert config.enrich is True
    assert config.debug is True


def _found(forecast="Sunny."):
    orchestrator = MagicMock()
    orchestrator.lookup.return_value = PipelineResult(
        forecast=forecast, state=PipelineState(), found=True
    )
    return orchestrator


def test_handle_message_phrase_replies_to_sender():
    fake_bot = MagicMock()
    orchestrator = _found()

    handled = bot.handle_message(fake_bot, orchestrator, "aa11", "The weather in Boston is...")

    assert handled is False
    orchestrator.lookup.assert_called_once_with("Boston", enrich=False)
    fake_bot.send.assert_called_once_with("aa11", "Forecast for Boston:\nSunny.")


def test_handle_message_passes_enrich_flag():
    orchestrator = _found()
    bot.handle_message(MagicMock(), orchestrator, "aa11", "The forecast for Boston..", enrich=True)
    orchestrator.lookup.assert_called_once_with("Boston", enrich=True)


def test_handle_message_leaves_commands_and_help_alone():
    fake_bot = MagicMock()
    orchestrator = _found()

    assert bot.handle_message(fake_bot, orchestrator, "aa11", "weather Boston") is False
    assert bot.handle_message(fake_bot, orchestrator, "aa11", " Help ") is False

    orchestrator.lookup.assert_not_called()
    fake_bot.send.assert_not_called()


def test_handle_message_ignores_other_text():
    fake_bot = MagicMock()
    orchestrator = _found()

    assert bot.handle_message(fake_bot, orchestrator, "aa11", "hello there") is False

    orchestrator.lookup.assert_not_called()
    fake_bot.send.assert_not_called()
