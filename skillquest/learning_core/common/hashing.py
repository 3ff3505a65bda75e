import hashlib


def stable_hash_text(text: str) -> str:
    """
    @param text 해시 대상 문자열.
    @returns SHA-256 해시 문자열.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def stable_bucket(text: str, modulo: int) -> int:
    """
    @param text 기준 문자열.
    @param modulo 버킷 크기.
    @returns 문자열 해시를 modulo로 나눈 나머지 (실행마다 동일).
    """
    return int(stable_hash_text(text)[:12], 16) % modulo
