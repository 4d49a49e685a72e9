def test_analyze_is_rate_limited_per_user(client, headers, user_id):
    # conftest sets ANALYZE_RATE_LIMIT to 10/minute
    for _ in range(10):
        r = client.post("/api/symptoms/analyze", headers=headers, json={"text": "headache"})
        assert r.status_code == 200
    r = client.post("/api/symptoms/analyze", headers=headers, json={"text": "headache"})
    assert r.status_code == 429
    j = r.json()
    assert j["code"] == "TOO_MANY_REQUESTS"
    assert "trace_id" in j
    assert r.headers.get("Retry-After")

    # a different user still has budget
    other = client.post("/api/symptoms/analyze", headers={"X-User-Id": f"{user_id}-b"}, json={"text": "headache"})
    assert other.status_code == 200
