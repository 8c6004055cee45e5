"""Turn a client request body into the final prompt sent to the model.

Two request shapes are accepted:

- raw mode: ``{"prompt": "..."}``, passed through after the system instruction
- structured mode: ``{"intent": {"module": ..., "input": ..., "subject": ...}}``,
  framed by the template of the selected module

``build_prompt`` never raises; unknown modules fall back to the generic template.
"""
from __future__ import annotations
import re
from enum import Enum
from typing import Any, Dict, Mapping, Optional


SYSTEM_INSTRUCTION = (
	"You are AI Study Doctor.\n"
	"Your purpose is to help students academically and emotionally.\n"
	"You must strictly follow the role defined by the MODULE.\n"
	"Never mix roles.\n"
	"Never give medical or clinical advice.\n"
	"Your tone must always be student-friendly, calm, and motivating."
)

EMPTY_PROMPT_NOTICE = "(Empty prompt received)"

CODE_SAFETY_NOTE = (
	"\n\n[Note: The user included Python code. Do NOT execute code. Provide code in a fenced "
	"```python``` block and a short explanation. If code looks malformed, try to fix minor "
	"syntax issues but do not invent behavior.]"
)

FENCE = "```"
_PYTHON_SIGNAL = re.compile(r"\[python\]|```python|\bpython\b", re.IGNORECASE)


class ModuleKind(str, Enum):
	WELLNESS = "wellness"
	TUTOR = "tutor"
	EXAMINER = "examiner"
	STUDY_PLANNER = "study_planner"
	GENERIC = "generic"

	@classmethod
	def parse(cls, name: Any) -> "ModuleKind":
		key = str(name or "").strip().lower()
		return _MODULE_ALIASES.get(key, cls.GENERIC)


_MODULE_ALIASES: Dict[str, ModuleKind] = {
	"wellness": ModuleKind.WELLNESS,
	"tutor": ModuleKind.TUTOR,
	"examiner": ModuleKind.EXAMINER,
	"studyplanner": ModuleKind.STUDY_PLANNER,
	"study-plan": ModuleKind.STUDY_PLANNER,
}


def sanitize_code_blocks(text: str) -> str:
	"""Close a dangling ``` fence so renderers don't swallow the rest of the reply."""
	if text.count(FENCE) % 2 != 0:
		return text + "\n" + FENCE
	return text


def has_python_signal(text: str) -> bool:
	return bool(_PYTHON_SIGNAL.search(text))


def _user_text(intent: Mapping[str, Any]) -> str:
	for field in ("input", "message", "intent"):
		value = intent.get(field)
		if value:
			return str(value)
	return ""


def render_module_prompt(kind: ModuleKind, user_text: str, subject: Optional[str] = None) -> str:
	if kind is ModuleKind.WELLNESS:
		return (
			"You are an empathetic wellness mentor. Keep responses supportive, non-clinical, and focused "
			"on study-related wellbeing. Reply briefly and include one actionable tip.\n"
			f'Student message:\n"{user_text}"'
		)
	if kind is ModuleKind.TUTOR:
		return (
			"You are a tutor. Explain the student's doubt in very simple words, provide one short example, "
			"and avoid advanced jargon.\n"
			f"Topic/subject: {subject or 'General'}\n"
			f'Student doubt:\n"{user_text}"'
		)
	if kind is ModuleKind.EXAMINER:
		return (
			"You are an examiner. Generate one concise mock question and a short explanation/answer. "
			f'Topic:\n"{user_text}"'
		)
	if kind is ModuleKind.STUDY_PLANNER:
		return (
			"You are a study planner. Suggest a short, pragmatic study plan tailored to the student's exam "
			f'date or constraints. Context:\n"{user_text}"'
		)
	return f'User input:\n"{user_text}"'


def build_prompt(body: Any) -> str:
	if not body:
		return SYSTEM_INSTRUCTION + "\n\n" + EMPTY_PROMPT_NOTICE
	# Arrays, strings and numbers carry no prompt or intent
	if not isinstance(body, Mapping):
		body = {}

	raw = body.get("prompt")
	if isinstance(raw, str):
		return SYSTEM_INSTRUCTION + "\n\n" + sanitize_code_blocks(raw)

	intent = body.get("intent")
	if not isinstance(intent, Mapping):
		intent = {}
	kind = ModuleKind.parse(intent.get("module") or intent.get("type"))
	user_text = sanitize_code_blocks(_user_text(intent))
	subject = intent.get("subject")

	code_note = CODE_SAFETY_NOTE if has_python_signal(user_text) else ""
	module_prompt = render_module_prompt(kind, user_text, str(subject) if subject else None)
	return SYSTEM_INSTRUCTION + "\n\n" + module_prompt + code_note
