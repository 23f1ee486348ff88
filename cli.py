# Role: Local developer CLI to generate itineraries without the web API.
# Useful for trying prompts against Gemini and seeing debug logs in the terminal.

from __future__ import annotations

import json
from typing import Optional

import travelai.config
travelai.config.load_env()

from travelai.core.pipeline import ItineraryPipeline
from travelai.models.errors import PipelineError
from travelai.models.itinerary import CanonicalItinerary


def format_itinerary(itinerary: CanonicalItinerary) -> str:
    # Role: compact human-readable summary (destination header, then day-by-day activities).
    lines = [f"{itinerary.destination} ({itinerary.duration} days)"]
    if itinerary.estimated_budget:
        lines.append(f"Budget: {itinerary.estimated_budget}")
    if itinerary.weather_overview:
        lines.append(f"Weather: {itinerary.weather_overview}")

    for day in itinerary.days:
        header = f"\nDay {day.day_number}"
        if day.date:
            header += f" - {day.date}"
        lines.append(header)
        if day.weather.condition or day.weather.temp_range:
            lines.append(f"  Weather: {day.weather.condition} {day.weather.temp_range}".rstrip())
        if not day.activities:
            lines.append("  No activities planned for this day.")
        for activity in day.activities:
            slot = f"[{activity.time_slot}] " if activity.time_slot else ""
            cost = f" ({activity.cost})" if activity.cost else ""
            lines.append(f"  - {slot}{activity.name or 'Activity'}{cost}")
        if day.day_summary:
            lines.append(f"  {day.day_summary}")

    if itinerary.essential_travel_tips:
        lines.append("\nTips:")
        lines.extend(f"  - {tip}" for tip in itinerary.essential_travel_tips)

    contacts = itinerary.emergency_info.contacts
    if contacts:
        lines.append("\nEmergency contacts: " + "; ".join(contacts))

    return "\n".join(lines)


def main() -> None:
    # 1) Create the pipeline
    # 2) Read natural-language requests in a loop
    # 3) Print a summary (or raw JSON) or the public error message
    print("TravelAI Itinerary CLI")
    print("Describe your trip, e.g. 'Plan a 3-day trip to Lisbon on a budget'.")
    print("Commands: /json (toggle JSON output), /retry (repeat last request), /exit")
    print("-" * 50)

    pipeline = ItineraryPipeline()
    show_json = False
    last_query: Optional[str] = None

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd == "/json":
            show_json = not show_json
            print(f"JSON output {'on' if show_json else 'off'}")
            continue

        if cmd == "/retry":
            if last_query is None:
                print("Nothing to retry yet.")
                continue
            # Key line: a retry is a brand-new invocation (fresh directive, fresh Gemini call).
            user_message = last_query

        last_query = user_message

        try:
            itinerary = pipeline.generate({"naturalLanguageQuery": user_message})
        except PipelineError as e:
            print(f"\nError: {e.public_message}")
            if travelai.config.DEBUG:
                print(f"Details: {e.details}")
            if e.retryable:
                print("This is usually temporary. Type /retry to try again.")
            continue

        if show_json:
            print(json.dumps(itinerary.to_json_dict(), indent=2, ensure_ascii=False))
        else:
            print(f"\n{format_itinerary(itinerary)}")


if __name__ == "__main__":
    main()
