"""Forecast bot module."""

import argparse
import logging

from lxmfy import LXMFBot

from forecast_bot.cache import KeyValueStateStore, ResolutionCache
from forecast_bot.conditions import AccuWeatherClient, render_conditions
from forecast_bot.config import DEFAULT_STORAGE_PATH, STATE_KEY, BotConfig
from forecast_bot.logging_setup import setup_logging
from forecast_bot.pipeline import PipelineOrchestrator, PipelineResult
from forecast_bot.subscriptions import load_subscriptions, subscribe, unsubscribe
from forecast_bot.triggers import match_phrase, parse_command

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Forecast Bot Commands:\n\n"
    "Ask in a sentence:\n"
    "- The weather in Los Angeles, CA is...\n"
    "- The forecast for Boston..\n\n"
    "Or use a command:\n"
    "- 'weather <place>' - Today's forecast\n"
    "- 'forecast <place>' - Same as weather\n"
    "- 'subscribe <place>' - Receive the scheduled report for a place\n"
    "- 'unsubscribe' - Stop the scheduled report\n\n"
    "Forecasts come from the US National Weather Service, so US places only."
)


def build_orchestrator(storage, config: BotConfig) -> PipelineOrchestrator:
    """Wire the lookup pipeline to the bot's key-value storage."""
    cache = ResolutionCache(KeyValueStateStore(storage, STATE_KEY))
    conditions = None
    if config.enrichment_available:
        conditions = AccuWeatherClient(config.accuweather_api_key)
    return PipelineOrchestrator(cache, conditions=conditions)


def format_report(place_name: str, result: PipelineResult) -> str:
    """Return the message text for a pipeline result."""
    if not result.found:
        return result.forecast

    output = [f"Forecast for {place_name}:", result.forecast]
    if result.conditions is not None:
        rendered = render_conditions(result.conditions)
        if rendered:
            output.append("\n" + rendered)
    return "\n".join(output)


def process_forecast_request(
    bot,
    orchestrator: PipelineOrchestrator,
    destination,
    place_name: str,
    ctx=None,
    enrich: bool = False,
):
    """Run the pipeline for a place and send the result.

    Args:
        bot: The LXMFBot instance.
        orchestrator: The lookup pipeline.
        destination: The destination LXMF hash to send to.
        place_name: The place to look up, exactly as received.
        ctx: Optional command context (if None, uses bot.send directly).
        enrich: Include AccuWeather current conditions when configured.

    """
    result = orchestrator.lookup(place_name, enrich=enrich)
    reply = format_report(place_name, result)
    try:
        if ctx:
            ctx.reply(reply)
        else:
            bot.send(destination, reply)
    except Exception:
        logger.exception("Failed to deliver forecast to %s", destination)


def handle_message(
    bot,
    orchestrator: PipelineOrchestrator,
    sender,
    content: str,
    enrich: bool = False,
):
    """Answer a forecast phrase. Returns False so commands and help are still handled."""
    content = content.strip()

    command, _ = parse_command(content)
    if command is not None or content.lower() == "help":
        return False

    place_name = match_phrase(content)
    if place_name is None:
        logger.debug("Ignoring message from %s: no forecast phrase", sender)
        return False

    process_forecast_request(bot, orchestrator, sender, place_name, enrich=enrich)
    return False


def send_scheduled_reports(bot, orchestrator: PipelineOrchestrator):
    """Send the forecast for every subscribed place to its subscribers."""
    subscriptions = load_subscriptions(bot.storage)
    logger.info("Running scheduled reports for %d place(s)", len(subscriptions))

    for place_name, destinations in subscriptions.items():
        result = orchestrator.lookup(place_name, enrich=True)
        reply = format_report(place_name, result)
        for destination in destinations:
            try:
                bot.send(destination, reply)
            except Exception:
                logger.exception("Failed to deliver scheduled forecast to %s", destination)


def parse_args(argv=None) -> BotConfig:
    parser = argparse.ArgumentParser(description="Run the LXMF Forecast Bot.")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for lookups and cache activity.",
    )
    parser.add_argument(
        "--config",
        "-c",
        metavar="PATH",
        dest="config_path",
        default=None,
        help="Path to Reticulum configuration directory.",
    )
    parser.add_argument(
        "--identity",
        "-i",
        metavar="PATH",
        dest="identity_path",
        default=None,
        help="Path to LXMF identity file.",
    )
    parser.add_argument(
        "--storage",
        "-s",
        metavar="PATH",
        dest="storage_path",
        default=None,
        help="Path to bot storage directory.",
    )
    parser.add_argument(
        "--log-dir",
        metavar="PATH",
        dest="log_dir",
        default=None,
        help="Also write a rotating log file to this directory.",
    )
    parser.add_argument(
        "--schedule",
        metavar="CRON",
        default=None,
        help="Cron expression for sending reports to subscribers (e.g. '0 7 * * *').",
    )
    parser.add_argument(
        "--enrich",
        action="store_true",
        help="Add AccuWeather current conditions to replies (needs ACCUWEATHER_API_KEY).",
    )
    args = parser.parse_args(argv)

    return BotConfig(
        storage_path=args.storage_path or DEFAULT_STORAGE_PATH,
        config_path=args.config_path,
        identity_path=args.identity_path,
        log_dir=args.log_dir,
        debug=args.debug,
        enrich=args.enrich,
        schedule=args.schedule,
    )


def main(argv=None):
    """Main entry point for the forecast bot."""
    config = parse_args(argv)
    setup_logging(log_dir=config.log_dir, debug=config.debug)

    if (config.enrich or config.schedule) and not config.enrichment_available:
        logger.warning("ACCUWEATHER_API_KEY is not set; replies will not include current conditions")

    bot_kwargs = {
        "name": config.name,
        "command_prefix": "",
        "storage_type": "json",
        "storage_path": config.storage_path,
        "announce": 6000,
        "announce_immediately": False,
        "first_message_enabled": True,
    }

    if config.config_path:
        bot_kwargs["config_path"] = config.config_path
    if config.identity_path:
        bot_kwargs["identity_path"] = config.identity_path

    bot = LXMFBot(**bot_kwargs)
    orchestrator = build_orchestrator(bot.storage, config)

    @bot.command(name="help", description="Show help information")
    def help_command(ctx):
        ctx.reply(HELP_TEXT)

    def lookup_command(ctx, command):
        if not ctx.args:
            ctx.reply(f"Please provide a place. Example: {command} Los Angeles, CA")
            return
        place_name = " ".join(ctx.args)
        process_forecast_request(
            bot, orchestrator, ctx.sender, place_name, ctx=ctx, enrich=config.enrich
        )

    @bot.command(name="weather", description="Get today's forecast for a place")
    def weather_command(ctx):
        lookup_command(ctx, "weather")

    @bot.command(name="forecast", description="Get today's forecast for a place")
    def forecast_command(ctx):
        lookup_command(ctx, "forecast")

    @bot.command(name="subscribe", description="Receive the scheduled report for a place")
    def subscribe_command(ctx):
        if not ctx.args:
            ctx.reply("Please provide a place. Example: subscribe Los Angeles, CA")
            return
        place_name = " ".join(ctx.args)
        subscribe(bot.storage, place_name, str(ctx.sender))
        if config.schedule:
            ctx.reply(f'Subscribed to the scheduled report for "{place_name}".')
        else:
            ctx.reply(f'Subscribed to "{place_name}", but no report schedule is configured.')

    @bot.command(name="unsubscribe", description="Stop the scheduled report")
    def unsubscribe_command(ctx):
        if unsubscribe(bot.storage, str(ctx.sender)):
            ctx.reply("Unsubscribed.")
        else:
            ctx.reply("You are not subscribed.")

    @bot.on_message()
    def handle_forecast_message(sender, message):
        content = message.content.decode("utf-8")
        return handle_message(bot, orchestrator, sender, content, enrich=config.enrich)

    if config.schedule:
        bot.scheduler.add_task(
            "scheduled_forecast",
            lambda: send_scheduled_reports(bot, orchestrator),
            config.schedule,
        )
        logger.info("Scheduled reports enabled: %s", config.schedule)

    logger.info("Starting bot: %s", bot.config.name)
    logger.info("Bot LXMF Address: <%s>", bot.local.hash.hex())
    bot.run()


if __name__ == "__main__":
    main()
