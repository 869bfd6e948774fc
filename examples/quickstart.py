import httpx

BASE = "http://127.0.0.1:8088"


def post(path, body):
    r = httpx.post(f"{BASE}{path}", json=body, timeout=10)
    print(r.status_code, r.json())
    return r


def main() -> None:
    # mint, contribute, three up votes -> approved, then a share that no longer fits
    nft = post("/api/nfts", {
        "creator": "0xA", "title": "Night Drive", "description": "Synthwave single, open for collaborators",
        "royalty_budget_bps": 5000,
    }).json()["nft"]

    art = post(f"/api/nfts/{nft['id']}/contribute", {
        "contributor": "0xB", "kind": "art", "requested_share_bps": 2000,
        "content_uri": "ipfs://cover-art",
    }).json()["contribution"]
    for voter in ("0xC", "0xD", "0xE"):
        post(f"/api/contributions/{art['id']}/vote", {"voter": voter, "direction": "up"})

    lyrics = post(f"/api/nfts/{nft['id']}/contribute", {
        "contributor": "0xF", "kind": "lyrics", "requested_share_bps": 4000,
    }).json()["contribution"]
    for voter in ("0xC", "0xD", "0xE"):
        post(f"/api/contributions/{lyrics['id']}/vote", {"voter": voter, "direction": "up"})

    r = httpx.get(f"{BASE}/api/nfts/{nft['id']}/royalties", params={"amount": 1_000_000}, timeout=10)
    print(r.status_code, r.json())
    r = httpx.get(f"{BASE}/api/metadata/{nft['id']}", timeout=10)
    print(r.status_code, r.json())


if __name__ == "__main__":
    main()
