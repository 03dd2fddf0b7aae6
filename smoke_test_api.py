#!/usr/bin/env python3
"""
Smoke test for a running server (python start_server.py, then python seed_all.py)
Logs in as the demo owner and walks the organization endpoints
"""

import os
import requests

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
OWNER = {"email": "alex@demo.com", "password": "password123"}

def check(label, response, expected=200):
    mark = "✓" if response.status_code == expected else "✗"
    print(f"{mark} {label}: {response.status_code}")
    return response.status_code == expected

def print_tree(nodes, indent=0):
    for node in nodes:
        name = node["user"]["name"] if node.get("user") else f"staff {node['id']}"
        print(f"   {'  ' * indent}- {name} ({node.get('position') or node['role']})")
        print_tree(node["children"], indent + 1)

def run_smoke_test():
    print("Testing Organization Workspace API...")
    print("=" * 50)

    check("Health", requests.get(f"{BASE_URL}/health"))

    login = requests.post(f"{BASE_URL}/auth/login", json=OWNER)
    if not check("Login", login):
        print(f"  Response: {login.text}")
        return
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    orgs = requests.get(f"{BASE_URL}/organizations/", headers=headers)
    if not check("Organizations", orgs) or not orgs.json():
        return
    org_id = orgs.json()[0]["id"]
    params = {"organization_id": org_id}

    staff = requests.get(f"{BASE_URL}/organization-staff/", params=params, headers=headers)
    if check("Staff", staff):
        print(f"  {len(staff.json())} staff members")

    chart = requests.get(f"{BASE_URL}/organization-staff/hierarchy", params=params, headers=headers)
    if check("Hierarchy", chart):
        print_tree(chart.json()["roots"])
        if chart.json()["unreachable"]:
            print(f"  Unreachable: {chart.json()['unreachable']}")

    check("Goals", requests.get(f"{BASE_URL}/organization-goals/", params=params, headers=headers))
    check("Corporate tasks", requests.get(f"{BASE_URL}/corporate-tasks/", params=params, headers=headers))
    check("My assignments", requests.get(f"{BASE_URL}/my-assignments", params=params, headers=headers))
    check("Deadlines", requests.get(f"{BASE_URL}/deadlines", params=params, headers=headers))
    check("Scheduler status", requests.get(f"{BASE_URL}/scheduler/status"))

    print("\n" + "=" * 50)
    print("Smoke test completed!")

if __name__ == "__main__":
    run_smoke_test()
