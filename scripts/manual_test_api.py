#!/usr/bin/env python3
"""
Quick test script to verify the Painting Lead Assistant API
Run the server first: uvicorn app.main:app --reload
"""

import requests
import json

BASE_URL = "http://127.0.0.1:8000"
CONVERSATION_ID = "manual-test"


def turn(text):
    response = requests.post(
        f"{BASE_URL}/lead/turn",
        json={"conversation_id": CONVERSATION_ID, "text": text},
    )
    data = response.json()
    print(f"   Status: {response.status_code}")
    print(f"   Rule: {data['rule']}")
    print(f"   Assistant says: {data['reply']}")
    print(f"   State: {data['state']}\n")
    return data


def test_api():
    print("Testing Painting Lead Assistant API...\n")

    # Test 1: Root endpoint
    print("1. Testing root endpoint...")
    response = requests.get(f"{BASE_URL}/")
    print(f"   Status: {response.status_code}")
    print(f"   Response: {response.json()}\n")

    # Test 2: Greeting
    print("2. Testing greeting...")
    turn("namaste")

    # Test 3: New lead details
    print("3. Testing lead details...")
    turn("2BHK interior repaint HSR 27th Main, customer Rahil 9876543210, next week")

    # Test 4: Confirmation
    print("4. Testing confirmation...")
    data = turn("haan kar do")
    lead_id = data["state"]["lead_id"]

    # Test 5: Quote before measurements
    print("5. Testing quote without measurements...")
    data = turn("is project ka quote bana do, 3 options")
    if data.get("dependencies"):
        print(f"   Dependencies: {json.dumps(data['dependencies'], ensure_ascii=False)}\n")

    # Test 6: Record measurements and retry
    if lead_id:
        print("6. Recording measurements...")
        response = requests.put(
            f"{BASE_URL}/leads/{lead_id}/measurements",
            json={"bhk": 2, "sqft": 850},
        )
        print(f"   Status: {response.status_code}")
        print(f"   Measurements: {response.json()}\n")

        print("7. Testing quote with measurements...")
        turn("quote bana do, 2 options, timeline 2 weeks, advance 40%")

    # Test 8: Project questionnaire
    print("8. Testing project questionnaire...")
    for text in ["/project", "2BHK flat, Whitefield", "3 kamre", "kar do"]:
        response = requests.post(
            f"{BASE_URL}/project/turn",
            json={"chat_id": CONVERSATION_ID, "text": text},
        )
        print(f"   > {text}")
        print(f"   {json.dumps(response.json(), ensure_ascii=False)}\n")

    # Test 9: Captured leads
    print("9. Listing leads...")
    response = requests.get(f"{BASE_URL}/leads")
    print(f"   Status: {response.status_code}")
    print(f"   Leads: {len(response.json())}\n")

    print("All tests completed!")


if __name__ == "__main__":
    try:
        test_api()
    except requests.exceptions.ConnectionError:
        print("ERROR: Could not connect to server. Make sure it's running:")
        print("   uvicorn app.main:app --reload")
