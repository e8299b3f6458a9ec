"""Prompt text and loading copy for the quiz."""

from typing import List, Optional, Sequence

from app.models.quiz import AgeBand, Gender, Question, QuizResult

QUESTION_LOADING_MESSAGE = "당신을 위한 질문을 만들고 있어요..."

ANALYSIS_LOADING_MESSAGES = [
    "AI가 당신의 매력을 분석하는 중... 이 시간은 우주적 지혜와 (가상의) 광고주가 함께 제공합니다! 🚀",
    "결과를 계산하는 중... 잠깐! 이 멋진 (상상속의) 광고 보고 가실게요! 😉",
    "당신의 미래를 예측하고 있습니다... 잠시 후 가상의 광고가 끝나면 결과가 표시됩니다. 채널 고정! 📺",
]

IMAGE_LOADING_MESSAGES = [
    "당신의 영혼 동물을 화폭에 담는 중... 광고주가 물감을 협찬했습니다. (아마도) 🎨",
    "AI 화가가 초상화를 그리고 있어요. 이 광고가 끝나면 멋진 작품이 탄생할 거예요! 🖼️",
    "신비한 동물사전에서 당신과 닮은 동물을 찾는 중... (광고주의 도움으로 더 빨리 찾고 있습니다.)",
]

QUESTIONS_FAILED_MESSAGE = "질문을 생성하는 데 실패했습니다. 잠시 후 다시 시도해 주세요."
ANALYSIS_FAILED_MESSAGE = "결과를 분석하는 데 실패했습니다. 잠시 후 다시 시도해 주세요."
IMAGE_FAILED_MESSAGE = "동물 이미지를 생성하는 데 실패했습니다. 결과 페이지로 돌아갑니다."

UNANSWERED_LABEL = "(응답 없음)"


def build_question_prompt(gender: Gender, age: AgeBand, count: int = 10) -> str:
    """Build the question-generation prompt for a demographic."""
    return (
        f"당신은 심리학 박사입니다. {age.value} {gender.label}의 연애 스타일에 맞춰진, "
        f"그들의 공감을 살 수 있는 {count}개의 짧은 객관식 질문을 만들어 주세요. "
        "질문은 해당 연령대와 성별의 관심사와 고민을 현실적으로 반영해야 합니다. "
        "각 질문에는 5개의 선택지가 있어야 합니다. "
        "질문은 한국어로 하고, JSON 형식의 문자열 배열로 반환해 주세요. "
        '각 객체는 "question"과 5개의 문자열을 담은 "options" 배열을 포함해야 합니다. '
        '예: [{"question": "...", "options": ["...", "...", "...","...","..."]}, ...]'
    )


def format_qa_pairs(
    questions: Sequence[Question], answers: Sequence[Optional[int]]
) -> str:
    """Render each question with the text of the option picked for it."""
    blocks: List[str] = []
    for question, answer in zip(questions, answers):
        chosen = question.options[answer] if answer is not None else UNANSWERED_LABEL
        blocks.append(f"질문: {question.text}\n선택한 답변: {chosen}")
    return "\n\n".join(blocks)


def build_analysis_prompt(
    gender: Gender,
    age: AgeBand,
    questions: Sequence[Question],
    answers: Sequence[Optional[int]],
) -> str:
    """Build the personality-analysis prompt from the answered quiz."""
    qa_pairs = format_qa_pairs(questions, answers)
    return (
        "당신은 유머러스하고 재치있는 심리학 박사이자, 때로는 뼈아픈 조언을 하는 코미디언입니다. "
        f"{age.value} {gender.label} 사용자가 다음 질문에 이렇게 답했습니다:\n\n"
        f"{qa_pairs}\n\n"
        "이 답변들을 바탕으로, 사용자의 연애 매력을 분석해 주세요. "
        "분석 내용은 다음과 같은 JSON 형식으로 반환해야 합니다:\n"
        '- "title": 사용자의 성격 유형에 대한 재치있는 제목\n'
        '- "strengths": 장점을 매우 유머러스하고 과장되게 칭찬하는 내용 (100자 내외)\n'
        '- "weaknesses": 단점을 코미디언이 청중에게 말하듯, 웃기면서도 정곡을 찌르는 말투로 '
        "지적하는 내용. 예를 들어, '그렇게 해서 연애를 할 수 있겠어요?' 같은 느낌으로 작성 (100자 내외)\n"
        "- \"mainWeakness\": 단점의 핵심을 나타내는 한두 단어의 키워드 (예: '결정장애', '짠돌이 기질')\n"
        '- "summary": 전체적인 연애 스타일에 대한 코믹하고 유쾌한 총평 (300자 내외)\n'
        "- \"score\": '이성에게 사랑받는 정도'를 100점 만점의 점수로 평가\n"
        '- "emoji": 사용자의 분위기를 나타내는 이모지 하나\n'
        '- "animal": 사용자의 성격과 가장 닮은 동물 하나\n\n'
        '전체 결과를 {"title": "...", "strengths": "...", "weaknesses": "...", '
        '"mainWeakness": "...", "summary": "...", "score": ..., "emoji": "...", '
        '"animal": "..."} 형식의 JSON 객체로 반환해 주세요.'
    )


def image_style(gender: Gender, age: AgeBand) -> str:
    """Pick the portrait art style for a demographic."""
    older = age.lower_bound >= 40
    if gender is Gender.MALE:
        if older:
            return "in a dynamic and expressive Korean webtoon art style"
        return "in a bold and action-packed American comic book art style"
    if older:
        return "in a beautiful and gentle Studio Ghibli animation style"
    return "in a cute and expressive Pixar/Dreamworks 3D animation style"


def build_image_prompt(result: QuizResult, gender: Gender, age: AgeBand) -> str:
    return (
        f"A full body portrait of a charismatic and funny {result.animal} character, "
        f"with a friendly and expressive face. {image_style(gender, age)}."
    )
