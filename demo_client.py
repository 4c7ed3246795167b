#!/usr/bin/env python3
"""Demo client that plays a short conversation against the Skill service."""
import time
import uuid

import requests

from langlearn.config import get_service_url

SKILL_URL = get_service_url("skill")
USER_ID = "amzn1.ask.account.demo-user"
APPLICATION_ID = "amzn1.ask.skill.demo"


def envelope(request_type, intent=None, slots=None, attributes=None):
    request = {"type": request_type, "requestId": f"demo-{uuid.uuid4().hex}"}
    if intent:
        request["intent"] = {
            "name": intent,
            "slots": {name: {"name": name, "value": value} for name, value in (slots or {}).items()},
        }
    return {
        "version": "1.0",
        "session": {
            "sessionId": "demo-session",
            "new": attributes is None,
            "attributes": attributes or {},
            "user": {"userId": USER_ID},
            "application": {"applicationId": APPLICATION_ID},
        },
        "context": {
            "System": {
                "user": {"userId": USER_ID},
                "application": {"applicationId": APPLICATION_ID},
            },
        },
        "request": request,
    }


def send(label, body):
    print(f"\n{'User:':<12} {label}")
    resp = requests.post(f"{SKILL_URL}/skill", json=body, timeout=30)
    resp.raise_for_status()
    result = resp.json()
    speech = result["response"].get("outputSpeech", {}).get("ssml", "")
    print(f"{'Skill:':<12} {speech}")
    return result


def demo_conversation():
    print("\n" + "=" * 70)
    print("LANGUAGE LEARNING SKILL DEMO")
    print("=" * 70)

    try:
        send("open language learning", envelope("LaunchRequest"))
        send("translate hello there into french",
             envelope("IntentRequest", "TranslateIntent", {"phrase": "hello there", "language": "french"}))
        send("translate xyzzy qux into french",
             envelope("IntentRequest", "TranslateIntent", {"phrase": "xyzzy qux", "language": "french"}))
        question = send("quiz me in french",
                        envelope("IntentRequest", "QuizIntent", {"language": "french"}))
        if question["sessionAttributes"].get("pendingRecord"):
            send("hello there",
                 envelope("IntentRequest", "QuizIntent", {"language": "french", "answer": "hello there"},
                          attributes=question["sessionAttributes"]))
        send("tell me a fact about japanese",
             envelope("IntentRequest", "FactIntent", {"language": "japanese"}))
        send("stop", envelope("IntentRequest", "AMAZON.StopIntent"))
    except requests.exceptions.RequestException as e:
        print(f"{'Error:':<12} Failed to reach skill service: {e}")
        print("\nMake sure the service is running: python3 services/skill/service.py")
        return

    print("\n" + "=" * 70)
    print("SERVICE METRICS")
    print("=" * 70)
    try:
        metrics = requests.get(f"{SKILL_URL}/metrics", timeout=2).json()
        for name, value in sorted(metrics.get("counters", {}).items()):
            print(f"  {name:<32} {value}")
    except requests.exceptions.RequestException:
        print("Could not fetch metrics")


if __name__ == "__main__":
    print("\nWaiting for the skill service to be ready...")
    time.sleep(1)

    try:
        resp = requests.get(f"{SKILL_URL}/health", timeout=2)
        if resp.status_code == 200:
            print("Skill service is ready")
        else:
            print(f"Skill service returned {resp.status_code}")
    except requests.exceptions.RequestException:
        print("\nSkill service is not responding!")
        print("Please start it first: python3 services/skill/service.py\n")
        raise SystemExit(1)

    demo_conversation()
