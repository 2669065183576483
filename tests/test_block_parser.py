import pytest

from clipnorm.config import BlockParserRules
from clipnorm.core.block_parser import ThreadBlockParser, parse_thread_content
from clipnorm.domain.models.thread_content import (
    BlockKind,
    ContentBlock,
    ProcessedThreadContent,
    SectionKind,
)

FIRST_LINE = "첫 문장은 충분히 길게 작성합니다 테스트용"
PROFILE_URL = "https://scontent.cdninstagram.com/v/t51/profile_s150x150.jpg"
PHOTO_URL = "https://scontent.cdninstagram.com/v/t51/photo_1080.jpg"


def _texts(section):
    return [block.content for block in section.blocks if block.kind is BlockKind.TEXT]


def test_numbered_continuation_opens_comment_section():
    result = parse_thread_content(f"{FIRST_LINE}\n1/ 두번째\n2/ ok")

    assert [s.kind for s in result.sections] == [SectionKind.MAIN, SectionKind.COMMENT]
    assert _texts(result.sections[0]) == [FIRST_LINE]
    assert _texts(result.sections[1]) == ["1/ 두번째", "2/ ok"]
    assert result.has_comments is True


@pytest.mark.parametrize("markdown", ["", "   \n\n  ", None])
def test_empty_input_yields_no_sections(markdown):
    result = parse_thread_content(markdown)

    assert result == ProcessedThreadContent()
    assert result.has_comments is False


def test_markdown_fixture(threads_markdown):
    result = parse_thread_content(threads_markdown)

    main, comments = result.sections
    assert main.blocks == (
        ContentBlock.image(PROFILE_URL),
        ContentBlock.text("오늘은 파이썬으로 스크래핑한 데이터를 정리하는 방법을 공유합니다 (이어서 계속👇)"),
        ContentBlock.image(PHOTO_URL),
    )
    assert _texts(comments) == ["1/ 첫 번째 팁은 정규식을 미리 컴파일해 두는 것입니다", "2/ ok"]
    assert result.image_urls() == [PROFILE_URL, PHOTO_URL]


def test_inline_images_become_separate_blocks_in_order():
    line = (
        "![a](https://cdn.example.com/x.jpg) 사진 설명은 이렇게 충분히 길게 씁니다 "
        "![b](/relative.png)"
    )

    result = parse_thread_content(line)

    assert result.sections[0].blocks == (
        ContentBlock.image("https://cdn.example.com/x.jpg"),
        ContentBlock.text("사진 설명은 이렇게 충분히 길게 씁니다"),
    )


def test_indicator_line_opens_comment_section_and_is_consumed():
    comment = "답글도 충분히 길게 작성해서 최소 길이 기준을 넘기도록 만들었습니다 (이어서👇)"
    markdown = f"메인 글은 충분히 길게 작성했습니다\nReplies\n짧은 반응입니다\n{comment}"

    result = parse_thread_content(markdown)

    main, comments = result.sections
    assert _texts(main) == ["메인 글은 충분히 길게 작성했습니다"]
    assert comments.kind is SectionKind.COMMENT
    assert _texts(comments) == [comment]


def test_indicator_phrase_inside_line_triggers_comment_section():
    parser = ThreadBlockParser()

    assert parser.is_comment_indicator("devkim replied to minji") is True
    assert parser.is_comment_indicator("  REPLIES  ") is True
    assert parser.is_comment_indicator("오늘의 답변입니다") is False


def test_english_lines_in_main_section_are_dropped():
    markdown = "This English sentence is UI chrome only\n한국어 본문은 이렇게 충분히 깁니다"

    result = parse_thread_content(markdown)

    assert len(result.sections) == 1
    assert _texts(result.sections[0]) == ["한국어 본문은 이렇게 충분히 깁니다"]


def test_repeated_text_is_deduplicated():
    line = "같은 문장이 두 번 반복되어 나타납니다"

    result = parse_thread_content(f"{line}\n{line}")

    assert _texts(result.sections[0]) == [line]


def test_emoticon_only_and_short_lines_are_dropped():
    markdown = "ㅋㅋㅋㅋㅋㅋㅋㅋㅋㅋㅋㅋ\n짧은 글\n본문은 이렇게 충분히 길게 작성합니다"

    result = parse_thread_content(markdown)

    assert _texts(result.sections[0]) == ["본문은 이렇게 충분히 길게 작성합니다"]


def test_numbered_first_line_stays_in_main():
    markdown = "1/ 첫 번째 줄은 번호로 시작합니다\n본문 두 번째 줄도 충분히 깁니다"

    result = parse_thread_content(markdown)

    assert len(result.sections) == 1
    assert result.sections[0].kind is SectionKind.MAIN
    assert _texts(result.sections[0]) == [
        "1/ 첫 번째 줄은 번호로 시작합니다",
        "본문 두 번째 줄도 충분히 깁니다",
    ]


def test_short_unnumbered_comment_without_marker_is_dropped():
    markdown = f"{FIRST_LINE}\n1/ 두번째\n이 댓글은 서른 글자를 넘기지 못합니다"

    result = parse_thread_content(markdown)

    assert _texts(result.sections[1]) == ["1/ 두번째"]


def test_to_dict_wire_shape():
    result = parse_thread_content(f"{FIRST_LINE}\n1/ 두번째")

    assert result.to_dict() == {
        "sections": [
            {"kind": "main", "blocks": [{"kind": "text", "content": FIRST_LINE}]},
            {"kind": "comment", "blocks": [{"kind": "text", "content": "1/ 두번째"}]},
        ],
        "hasComments": True,
    }


def test_custom_rules_raise_main_length_floor():
    parser = ThreadBlockParser(BlockParserRules(min_main_text_length=30))

    result = parser.parse(f"{FIRST_LINE}\n1/ 두번째\n2/ ok")

    main, comments = result.sections
    assert _texts(main) == ["1/ 두번째"]
    assert _texts(comments) == ["2/ ok"]


def test_content_block_rejects_empty_content():
    with pytest.raises(ValueError, match="cannot be empty"):
        ContentBlock.text("")


def test_long_unmarked_comment_is_kept():
    comment = "다른 사용자가 남긴 댓글인데 번호도 연속 표시도 없지만 내용이 충분히 길어서 남겨둡니다 " * 3
    comment = comment.strip()
    assert len(comment) > 100

    result = parse_thread_content(f"{FIRST_LINE}\n1/ 두번째\n{comment}")

    assert _texts(result.sections[1]) == ["1/ 두번째", comment]


def test_medium_unmarked_comment_is_dropped():
    comment = "이 댓글은 서른 글자를 넘기지만 백 글자에는 한참 못 미치는 짧은 의견입니다"
    assert 30 < len(comment) <= 100

    result = parse_thread_content(f"{FIRST_LINE}\n1/ 두번째\n{comment}")

    assert _texts(result.sections[1]) == ["1/ 두번째"]


def test_text_blocks_follow_document_order(threads_markdown):
    result = parse_thread_content(threads_markdown)

    assert result.text_blocks() == [
        "오늘은 파이썬으로 스크래핑한 데이터를 정리하는 방법을 공유합니다 (이어서 계속👇)",
        "1/ 첫 번째 팁은 정규식을 미리 컴파일해 두는 것입니다",
        "2/ ok",
    ]
