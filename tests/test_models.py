"""데이터 모델 테스트"""

import pytest

from eduvane.models import (
    AnalysisResult,
    InputFile,
    InterpretationResult,
    OwnershipContext,
    SessionState,
    Submission,
    SubmissionStatus,
    UnifiedInput,
    UserRole,
)


class TestSubmission:
    """제출물 상태 전이 테스트"""

    def test_happy_path(self):
        submission = Submission(file_name="a.png")
        submission.advance(SubmissionStatus.PROCESSING)
        submission.complete(AnalysisResult(id=submission.id))

        assert submission.status == SubmissionStatus.COMPLETED
        assert submission.result.id == submission.id
        assert submission.status_history == [
            SubmissionStatus.CREATED,
            SubmissionStatus.PROCESSING,
            SubmissionStatus.COMPLETED,
        ]

    def test_failure_records_message(self):
        submission = Submission(file_name="a.png")
        submission.advance(SubmissionStatus.PROCESSING)
        submission.fail("Unable to read the document.")

        assert submission.status == SubmissionStatus.ERROR
        assert submission.error == "Unable to read the document."
        assert submission.result is None

    @pytest.mark.parametrize("steps", [
        [SubmissionStatus.COMPLETED],
        [SubmissionStatus.PROCESSING, SubmissionStatus.CREATED],
        [SubmissionStatus.PROCESSING, SubmissionStatus.ERROR, SubmissionStatus.COMPLETED],
    ])
    def test_invalid_transitions(self, steps):
        """단조 증가하지 않는 전이는 ValueError"""
        submission = Submission(file_name="a.png")
        with pytest.raises(ValueError):
            for status in steps:
                submission.advance(status)

    def test_unique_ids(self):
        assert Submission(file_name="a").id != Submission(file_name="a").id


class TestAnalysisResultCoercion:
    """추론 응답 보정 테스트"""

    def test_scenario_d_missing_arrays(self):
        """feedback null / insights 누락 → 빈 리스트, 점수 placeholder"""
        result = AnalysisResult.from_reasoning(
            {"feedback": None, "guidance": "not a list"},
            InterpretationResult.default(),
            raw_text="text",
        )

        assert result.feedback == []
        assert result.insights == []
        assert result.guidance == []
        assert result.score.value == "-"
        assert result.score.label == "Pending"
        assert result.subject == "General"

    def test_invalid_items_dropped(self):
        """형식이 잘못된 항목만 제외"""
        result = AnalysisResult(feedback=[
            {"type": "gap", "text": "Missing units."},
            {"type": "opinion", "text": "?"},
            "just a string",
        ])

        assert [f.text for f in result.feedback] == ["Missing units."]
        assert [g.text for g in result.gaps] == ["Missing units."]

    def test_numeric_score_and_optional_objects(self):
        result = AnalysisResult(
            score={"value": 7.5, "label": "Good"},
            handwriting={"quality": "messy"},
            concept_stability={"status": "robust"},
        )

        assert result.score.value == "7.5"
        assert result.handwriting is None
        assert result.concept_stability.status == "robust"

    @pytest.mark.parametrize("value, expected", [("", None), ("   ", None), (None, None), (" Note ", "Note")])
    def test_teacher_insight_blank(self, value, expected):
        assert AnalysisResult(teacher_insight=value).teacher_insight == expected


class TestInterpretation:
    """해석 결과 모델 테스트"""

    def test_student_class_alias(self):
        """학생 학급은 'class' 키로 입력"""
        ownership = OwnershipContext.model_validate({
            "type": "teacher_uploaded_student_work",
            "student": {"name": "Tobi", "class": "JSS2", "confidence": "high"},
        })

        assert ownership.student.class_name == "JSS2"
        assert ownership.model_dump(by_alias=True)["student"]["class"] == "JSS2"

    def test_invalid_student_ignored(self):
        ownership = OwnershipContext.model_validate({"student": {"confidence": "certain"}})
        assert ownership.student is None

    def test_default(self):
        default = InterpretationResult.default()
        assert (default.subject, default.topic, default.intent) == ("General", "Unknown", "explanation")
        assert default.ownership.type == "student_direct"


class TestSessionModels:
    """세션/입력 모델 테스트"""

    def test_unified_input_requires_content(self):
        with pytest.raises(ValueError):
            UnifiedInput(text="   ")

    def test_file_only_input(self):
        file = InputFile(name="a.pdf", mime_type="application/pdf", data=b"%PDF")
        user_input = UnifiedInput(file=file)
        assert user_input.file is file and user_input.text is None
        assert file.is_pdf

    def test_input_file_from_path(self, tmp_path):
        path = tmp_path / "scan.png"
        path.write_bytes(b"png")

        file = InputFile.from_path(path)

        assert (file.name, file.mime_type, file.data) == ("scan.png", "image/png", b"png")

    def test_confirm_role(self):
        state = SessionState(role_asked=True)
        state.confirm_role(UserRole.STUDENT)

        assert state.role_confirmed and state.user_role == UserRole.STUDENT
        assert state.role_asked is False
