"""
Quiz generation services (OpenAI-compatible client)
NoteShare - Department Note-Sharing Portal

=== Pipeline ===
1. Read the note's stored file
2. TextExtractorFactory: PDF (pdfplumber), DOCX (python-docx),
   PPTX (python-pptx), plain text; anything else is unsupported
3. Truncate to AIConfiguration.max_input_chars
4. QuizGenerator: prompt for N four-option multiple-choice questions via
   openai.OpenAI pointed at AI_BASE_URL (Gemini's OpenAI gateway by default)
5. Parse the JSON array and keep only well-formed questions

QuizService wraps the pipeline with the per-user hourly limit and writes
a QuizRequestLog row for every attempt.
"""

from __future__ import annotations

import io
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

import pdfplumber
from django.conf import settings
from docx import Document
from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    InternalServerError,
    OpenAI,
    RateLimitError,
)
from pptx import Presentation

from apps.notes.services import NoteService, NoteStorageError
from .models import AIConfiguration, QuizRequestLog

logger = logging.getLogger('quizzes')

MAX_RETRIES = 3
OPTIONS_PER_QUESTION = 4


# ========== Exceptions ==========

class QuizError(Exception):
    """Base class for quiz generation failures."""
    status_code = 500


class QuizConfigurationError(QuizError):
    """AI endpoint missing or rejecting our credentials."""
    status_code = 503


class QuizServiceDisabledError(QuizError):
    """Turned off by an admin."""
    status_code = 503


class QuizAPIError(QuizError):
    status_code = 502


class QuizRateLimitError(QuizAPIError):
    """Upstream kept answering 429 after every retry."""
    status_code = 429


class QuizQuotaExceededError(QuizError):
    """The user hit their hourly quiz limit."""
    status_code = 429


class QuizFormatError(QuizError):
    """The model's reply is not a usable question list."""
    status_code = 502


class TextExtractionError(QuizError):
    status_code = 422


class UnsupportedFileTypeError(TextExtractionError):
    pass


class EmptyDocumentError(TextExtractionError):
    pass


class NoteFileMissingError(TextExtractionError):
    status_code = 404


# ========== Data Classes ==========

@dataclass
class QuizQuestion:
    question: str
    options: List[str]
    answer: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ========== Text Extractors ==========

class TextExtractor(ABC):
    """Turns the bytes of one file type into plain text."""

    @abstractmethod
    def supports(self, filename: str) -> bool:
        pass

    @abstractmethod
    def extract(self, data: bytes) -> str:
        pass

    @staticmethod
    def _suffix(filename: str) -> str:
        return PurePosixPath(filename).suffix.lower()


class PDFExtractor(TextExtractor):
    def supports(self, filename: str) -> bool:
        return self._suffix(filename) == '.pdf'

    def extract(self, data: bytes) -> str:
        try:
            text_parts = []
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
            return "\n".join(text_parts)
        except Exception as e:
            raise TextExtractionError(f"Failed to extract text from PDF: {e}") from e


class DocxExtractor(TextExtractor):
    def supports(self, filename: str) -> bool:
        return self._suffix(filename) == '.docx'

    def extract(self, data: bytes) -> str:
        try:
            doc = Document(io.BytesIO(data))
            return "\n".join(para.text for para in doc.paragraphs if para.text)
        except Exception as e:
            raise TextExtractionError(f"Failed to extract text from DOCX: {e}") from e


class PptxExtractor(TextExtractor):
    def supports(self, filename: str) -> bool:
        return self._suffix(filename) == '.pptx'

    def extract(self, data: bytes) -> str:
        try:
            prs = Presentation(io.BytesIO(data))
            text_parts = []
            for slide in prs.slides:
                for shape in slide.shapes:
                    if shape.has_text_frame and shape.text_frame.text:
                        text_parts.append(shape.text_frame.text)
            return "\n".join(text_parts)
        except Exception as e:
            raise TextExtractionError(f"Failed to extract text from PPTX: {e}") from e


class PlainTextExtractor(TextExtractor):
    SUPPORTED_EXTENSIONS = {'.txt', '.md', '.markdown', '.csv'}

    def supports(self, filename: str) -> bool:
        return self._suffix(filename) in self.SUPPORTED_EXTENSIONS

    def extract(self, data: bytes) -> str:
        return data.decode('utf-8', errors='replace')


class TextExtractorFactory:
    _extractors: List[TextExtractor] = [
        PDFExtractor(),
        DocxExtractor(),
        PptxExtractor(),
        PlainTextExtractor(),
    ]

    @classmethod
    def get_extractor(cls, filename: str) -> Optional[TextExtractor]:
        for extractor in cls._extractors:
            if extractor.supports(filename):
                return extractor
        return None

    @classmethod
    def extract_text(cls, filename: str, data: bytes) -> str:
        extractor = cls.get_extractor(filename)
        if extractor is None:
            suffix = PurePosixPath(filename).suffix or 'unknown'
            raise UnsupportedFileTypeError(
                f"Unsupported file type: {suffix}. Quizzes can be generated from PDF, Word, PowerPoint and text notes."
            )
        return extractor.extract(data)


# ========================================================================
# Quiz Generator (OpenAI-compatible)
# ========================================================================

QUIZ_PROMPT = """You are an assistant that writes study quizzes.
Based on the following text, generate a multiple-choice quiz with {count} questions.
Each question must have exactly {options} options, and exactly one of them is correct.
The "answer" field must be identical to one of the strings in "options".

Return ONLY a JSON array, with no extra text, in this format:
[
  {{
    "question": "Question text",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "answer": "Option B"
  }}
]

TEXT:
{text}
"""


class QuizGenerator:
    """
    Multiple-choice quiz writer over an OpenAI-compatible chat endpoint.

    === Admin Editable ===
    - Model, temperature, output tokens, input length, question count:
      Admin -> AI configuration
    - Disable the feature: Admin -> AI configuration -> Service enabled

    The client is built on first use from AI_API_KEY / AI_BASE_URL; tests
    pass their own.
    """

    def __init__(self, client=None, config: Optional[AIConfiguration] = None):
        self._config = config or AIConfiguration.get_config()
        self._client = client

    @property
    def config(self) -> AIConfiguration:
        return self._config

    def _check_service_enabled(self):
        if not self._config.is_service_enabled:
            raise QuizServiceDisabledError(
                self._config.maintenance_message or 'Quiz generation is temporarily unavailable.'
            )

    def _get_client(self):
        if self._client is None:
            api_key = getattr(settings, 'AI_API_KEY', '')
            if not api_key:
                raise QuizConfigurationError("AI_API_KEY is not configured. Add it to the .env file.")
            self._client = OpenAI(api_key=api_key, base_url=settings.AI_BASE_URL)
            logger.info(f"QuizGenerator client initialized | model: {self._config.active_model} | base_url: {settings.AI_BASE_URL}")
        return self._client

    def _generate_content(self, prompt: str) -> str:
        """One chat completion, retried with backoff on rate limits and transient errors."""
        self._check_service_enabled()
        client = self._get_client()

        for attempt in range(MAX_RETRIES):
            try:
                start_ms = int(time.time() * 1000)
                response = client.chat.completions.create(
                    model=self._config.active_model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=self._config.max_output_tokens,
                    temperature=self._config.temperature,
                )
                latency_ms = int(time.time() * 1000) - start_ms

                if response.choices and response.choices[0].message.content:
                    logger.info(f"AI response received in {latency_ms}ms (model={self._config.active_model})")
                    return response.choices[0].message.content.strip()
                raise QuizAPIError("Empty response from the AI service.")

            except AuthenticationError as e:
                logger.error(f"AI authentication failed: {e}")
                raise QuizConfigurationError(f"Authentication error: {e}") from e
            except RateLimitError as e:
                if attempt == MAX_RETRIES - 1:
                    raise QuizRateLimitError(
                        "The AI service is busy. Please wait a minute and try again."
                    ) from e
                wait_time = min(5.0 * (2 ** attempt), 30)
                logger.warning(f"Rate limit on attempt {attempt + 1}, waiting {wait_time}s")
                time.sleep(wait_time)
            except (APIConnectionError, APITimeoutError, InternalServerError) as e:
                if attempt == MAX_RETRIES - 1:
                    raise QuizAPIError(f"AI API error: {e}") from e
                wait_time = min(2.0 * (2 ** attempt), 15)
                logger.warning(f"API error on attempt {attempt + 1}, retrying in {wait_time}s: {e}")
                time.sleep(wait_time)
            except APIError as e:
                raise QuizAPIError(f"AI API error: {e}") from e

        raise QuizAPIError("AI API request failed after all retries.")

    def build_prompt(self, text: str) -> str:
        return QUIZ_PROMPT.format(
            count=self._config.question_count,
            options=OPTIONS_PER_QUESTION,
            text=text[:self._config.max_input_chars],
        )

    @staticmethod
    def _strip_code_fence(result: str) -> str:
        result = result.strip()
        if '```json' in result:
            result = result.split('```json')[1].split('```')[0]
        elif '```' in result:
            result = result.split('```')[1].split('```')[0]
        return result.strip()

    @staticmethod
    def _to_question(item) -> Optional[QuizQuestion]:
        if not isinstance(item, dict):
            return None
        question = item.get('question')
        options = item.get('options')
        answer = item.get('answer')
        if not isinstance(question, str) or not question.strip():
            return None
        if not isinstance(options, list) or len(options) != OPTIONS_PER_QUESTION:
            return None
        if not all(isinstance(opt, str) for opt in options):
            return None
        if not isinstance(answer, str) or answer not in options:
            return None
        return QuizQuestion(question=question.strip(), options=options, answer=answer)

    def parse_questions(self, result: str) -> List[QuizQuestion]:
        """
        Parse the model reply into questions.

        Raises:
            QuizFormatError: not JSON, not an array, or no usable question.
        """
        try:
            data = json.loads(self._strip_code_fence(result))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse quiz JSON: {e}")
            raise QuizFormatError("The AI returned an invalid format. Please try again.") from e

        if not isinstance(data, list):
            raise QuizFormatError("The AI returned an invalid format: expected a list of questions.")

        questions = []
        for index, item in enumerate(data):
            question = self._to_question(item)
            if question is None:
                logger.warning(f"Dropping malformed quiz item #{index}")
                continue
            questions.append(question)

        if not questions:
            raise QuizFormatError("The AI returned an invalid format: no valid questions.")
        return questions

    def generate_from_text(self, text: str) -> List[QuizQuestion]:
        if not text or not text.strip():
            raise EmptyDocumentError("The file is empty or contains no readable text.")
        result = self._generate_content(self.build_prompt(text))
        return self.parse_questions(result)

    def generate_for_note(self, note) -> List[QuizQuestion]:
        try:
            data = NoteService.read_file(note)
        except NoteStorageError as e:
            raise NoteFileMissingError(str(e)) from e
        text = TextExtractorFactory.extract_text(note.file_name, data)
        logger.info(f"Extracted {len(text)} characters from note {note.pk}")
        return self.generate_from_text(text)


# ========================================================================
# Quiz Service (rate limit + request log)
# ========================================================================

class QuizService:

    @classmethod
    def generate(cls, user, note, generator: Optional[QuizGenerator] = None) -> List[QuizQuestion]:
        """
        Generate a quiz for a note on behalf of a user.

        Every attempt is logged; errors are re-raised to the caller.
        """
        generator = generator or QuizGenerator()
        limit = generator.config.user_rate_limit_per_hour
        if QuizRequestLog.requests_in_last_hour(user) >= limit:
            raise QuizQuotaExceededError(
                f"You have reached the limit of {limit} quizzes per hour. Please try again later."
            )

        start = time.monotonic()
        log = QuizRequestLog(user=user, note=note)
        try:
            questions = generator.generate_for_note(note)
        except QuizError as e:
            log.error_message = str(e)
            log.latency_ms = int((time.monotonic() - start) * 1000)
            log.save()
            logger.warning(f"Quiz generation failed for note {note.pk} ({user.email}): {e}")
            raise

        log.success = True
        log.question_count = len(questions)
        log.latency_ms = int((time.monotonic() - start) * 1000)
        log.save()
        logger.info(f"Quiz with {len(questions)} question(s) generated for note {note.pk} ({user.email})")
        return questions
