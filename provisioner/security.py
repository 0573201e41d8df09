import hmac

def verify_secret(secret: str, expected: str) -> bool:
    # exact equality, compared in constant time
    return hmac.compare_digest(secret.encode("utf-8"), expected.encode("utf-8"))
