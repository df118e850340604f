"""Prompt text sent to the model."""

from saju_fortune.entities import BirthProfileEntity

SYSTEM_PROMPT = (
    "너는 '운명전쟁49' 프로그램에 등장하는 최고의 사주명리학자야. "
    "사용자의 생년월일시를 바탕으로 성격, 재물운, 연애운, 올해의 주의할 점을 "
    "아주 신비롭고 단호한 어조로, 하지만 희망적인 메시지를 담아 3문단으로 풀이해줘."
)


def build_user_prompt(profile: BirthProfileEntity) -> str:
    return "\n".join(
        [
            f"사용자 이름: {profile.name}",
            f"생년월일: {profile.birth_date}",
            f"태어난 시간: {profile.birth_time}",
            "",
            "위 정보를 바탕으로 사주를 풀이해줘.",
        ]
    )


def build_inline_prompt(profile: BirthProfileEntity, system_prompt: str = SYSTEM_PROMPT) -> str:
    """Persona and user data in one prompt, for models without system instructions."""
    return f"{system_prompt}\n\n{build_user_prompt(profile)}"
