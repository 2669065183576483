"""Pytest configuration and shared fixtures."""

import pytest

THREADS_DOM_TEXT = """devkim
5시간 전
오늘은 파이썬으로 스크래핑한 데이터를 정리하는 방법을 공유합니다

정규식은 미리 컴파일해 두면 훨씬 빠릅니다
Translate
642
36
Comments (3)

minji
2시간 전
좋은 팁 감사합니다! 바로 적용해 볼게요

jisoo_dev
컴파일 캐시는 re 모듈에도 있지 않나요? 궁금합니다

minji
2시간 전
좋은 팁 감사합니다! 바로 적용해 볼게요

Log in to see more replies
"""

THREADS_MARKDOWN = """Title: 개발자 스레드
URL Source: https://www.threads.net/@dev/post/123
Markdown Content:
===============

devkim
3d
![프로필](https://scontent.cdninstagram.com/v/t51/profile_s150x150.jpg)
오늘은 파이썬으로 스크래핑한 데이터를 정리하는 방법을 공유합니다 (이어서 계속👇)
![본문 이미지](https://scontent.cdninstagram.com/v/t51/photo_1080.jpg)
Translate
161
42
1/ 첫 번째 팁은 정규식을 미리 컴파일해 두는 것입니다
2/ ok
Log in to see more replies.
"""


@pytest.fixture
def threads_dom_text() -> str:
    return THREADS_DOM_TEXT


@pytest.fixture
def threads_markdown() -> str:
    return THREADS_MARKDOWN
