"""응답 변형 선택기 테스트"""

import pytest

from eduvane.models import UserRole
from eduvane.services.orchestration.responses import (
    ROLE_QUESTION,
    UNSET,
    VARIANTS,
    ResponseCategory,
    ResponseVariantSelector,
    get_varied_response,
)


class TestVariantPools:
    """템플릿 풀 구성 테스트"""

    @pytest.mark.parametrize("category", list(ResponseCategory))
    def test_every_role_has_two_or_three_variants(self, category):
        """카테고리/역할마다 2~3개 변형"""
        for key in (UserRole.TEACHER.value, UserRole.STUDENT.value, UNSET):
            assert 2 <= len(VARIANTS[category][key]) <= 3

    def test_unset_greetings_ask_role(self):
        """역할 미지정 인사는 모두 역할을 물음"""
        for template in VARIANTS[ResponseCategory.GREETING][UNSET]:
            assert ROLE_QUESTION in template


class TestResponseVariantSelector:
    """ResponseVariantSelector 테스트"""

    def test_injected_choice_is_deterministic(self):
        """주입한 선택 함수로 결정적 선택"""
        selector = ResponseVariantSelector(choose=lambda pool: pool[-1])
        first = selector.get(ResponseCategory.CONTINUITY, UserRole.STUDENT)
        second = selector.get(ResponseCategory.CONTINUITY, UserRole.STUDENT)
        assert first == second
        assert first == VARIANTS[ResponseCategory.CONTINUITY]["STUDENT"][-1].format(name_suffix="")

    def test_first_name_interpolated(self, selector):
        """이름의 첫 토큰만 사용"""
        text = selector.get(ResponseCategory.GREETING, UserRole.TEACHER, "Ada Lovelace")
        assert text.startswith("Hello, Ada.")
        assert "Lovelace" not in text

    def test_without_name(self, selector):
        """이름이 없으면 호칭 생략"""
        text = selector.get(ResponseCategory.GREETING, UserRole.STUDENT)
        assert text.startswith("Hi. ")

    def test_unset_role_uses_unset_pool(self, selector):
        """역할 None은 UNSET 풀 사용"""
        text = selector.get(ResponseCategory.GREETING, None, "Kemi")
        assert ROLE_QUESTION in text
        assert "Kemi" in text

    def test_choose_receives_role_pool(self):
        """선택 함수에는 해당 (카테고리, 역할) 풀이 전달됨"""
        seen = []

        def choose(pool):
            seen.append(tuple(pool))
            return pool[0]

        ResponseVariantSelector(choose=choose).get(ResponseCategory.FOLLOW_UP_TASK, UserRole.TEACHER)
        assert seen == [VARIANTS[ResponseCategory.FOLLOW_UP_TASK]["TEACHER"]]

    def test_default_selector_returns_pool_member(self):
        """기본 선택기는 풀 안의 변형 중 하나를 반환"""
        pool = {t.format(name_suffix="") for t in VARIANTS[ResponseCategory.FOLLOW_UP_ANALYSIS][UNSET]}
        for _ in range(10):
            assert get_varied_response(ResponseCategory.FOLLOW_UP_ANALYSIS) in pool
