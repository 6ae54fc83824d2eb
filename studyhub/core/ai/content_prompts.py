"""
Study content prompts.

System and user prompt templates for content generation and chat.
Every generation prompt opens with the same topic-anchoring rules and
repeats the topic at each placeholder of the JSON template so the model
stays on the single topic it was given.

Dependencies: langchain_core.prompts
System role: Prompt templates for the AI assistant
"""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from studyhub.core.ai.content_schema import ContentType, Difficulty

TOPIC_ANCHOR_PROMPT = """You are an expert educational content creator.

CRITICAL RULES:
1. ONLY generate content DIRECTLY related to the specific topic provided
2. DO NOT include unrelated concepts, subjects, or tangential information
3. Stay inside the topic as given; do not widen it to the surrounding subject
4. NEVER hallucinate or add content beyond the scope of the given topic
5. Stay focused and accurate - quality over quantity

TOPIC CONSTRAINT: All content must be directly relevant to: "{topic}\""""

FLASHCARDS_TEMPLATE = """Create flashcards in this EXACT JSON format:
{{
  "flashcards": [
    {{
      "question": "Clear, specific question ONLY about {topic}",
      "answer": "Comprehensive but concise answer (2-3 sentences max) ONLY about {topic}",
      "hint": "Optional helpful hint or memory aid ONLY about {topic}"
    }}
  ]
}}

Rules:
- Focus ONLY on key concepts directly related to {topic}
- Questions should test understanding of {topic} specifically
- Answers must be factual and to-the-point about {topic}
- Include hints for complex concepts within {topic}
- Generate exactly {count} flashcards
- DO NOT include concepts from other subjects or topics"""

MINDMAPS_TEMPLATE = """Create a mind map in this EXACT JSON format:
{{
  "mindmap": {{
    "central_topic": "{topic}",
    "branches": [
      {{
        "title": "Main branch ONLY related to {topic}",
        "subtopics": [
          "Subtopic 1 about {topic}",
          "Subtopic 2 about {topic}"
        ],
        "details": "Brief explanation ONLY about {topic}"
      }}
    ]
  }}
}}

Rules:
- Central topic must be exactly "{topic}"
- Create 3-5 main branches maximum, ALL related to {topic}
- Each branch should have 2-4 subtopics ONLY about {topic}
- Keep subtopics concise (1-3 words) and relevant to {topic}
- Details should explain connection to {topic} only"""

QUIZZES_TEMPLATE = """Create quiz questions in this EXACT JSON format:
{{
  "quiz": [
    {{
      "question": "Clear, specific question ONLY about {topic}",
      "options": ["Option A about {topic}", "Option B about {topic}", "Option C about {topic}", "Option D about {topic}"],
      "correct_answer": 0,
      "explanation": "Why this answer is correct, focusing ONLY on {topic}"
    }}
  ]
}}

Rules:
- Questions should test understanding and application of {topic} ONLY
- Always provide exactly 4 options, ALL related to {topic}
- correct_answer is the index (0-3) of the correct option
- Explanations must be educational and focused on {topic}
- Generate exactly {count} questions
- DO NOT include questions about unrelated topics"""

DIAGRAMS_TEMPLATE = """Create diagram descriptions in this EXACT JSON format:
{{
  "diagram": {{
    "title": "Diagram title for {topic}",
    "type": "flowchart|hierarchy|process|concept",
    "components": [
      {{
        "id": "component1",
        "label": "Component name related to {topic}",
        "description": "What this represents in {topic}"
      }}
    ],
    "connections": [
      {{
        "from": "component1",
        "to": "component2",
        "relationship": "leads to|part of|causes|connects to"
      }}
    ]
  }}
}}

Rules:
- Create clear, logical flow or hierarchy for {topic} ONLY
- Components should be key elements of {topic}
- Connections must show relationships within {topic}
- Keep labels concise but descriptive about {topic}"""

NOTES_TEMPLATE = """Create revision notes in this EXACT JSON format:
{{
  "notes": {{
    "title": "{topic}",
    "summary": "Brief 1-2 sentence overview of {topic}",
    "key_points": [
      {{
        "heading": "Main point heading about {topic}",
        "content": "Detailed explanation about {topic}",
        "importance": "high|medium|low"
      }}
    ],
    "formulas": [
      {{
        "name": "Formula name related to {topic}",
        "formula": "Mathematical expression for {topic}",
        "explanation": "When and how to use in {topic}"
      }}
    ],
    "quick_facts": [
      "Important fact 1 about {topic}",
      "Important fact 2 about {topic}"
    ]
  }}
}}

Rules:
- Start with clear overview of {topic}
- 5-8 key points maximum, ALL about {topic}
- Include relevant formulas ONLY if applicable to {topic}
- Quick facts should be memorable points about {topic}
- Use student-friendly language focused on {topic}"""

CONTENT_TEMPLATES: dict[ContentType, str] = {
    ContentType.FLASHCARDS: FLASHCARDS_TEMPLATE,
    ContentType.MINDMAPS: MINDMAPS_TEMPLATE,
    ContentType.QUIZZES: QUIZZES_TEMPLATE,
    ContentType.DIAGRAMS: DIAGRAMS_TEMPLATE,
    ContentType.NOTES: NOTES_TEMPLATE,
}

GENERATION_USER_PROMPT = """Topic: {topic}
Difficulty Level: {difficulty}
Subject Context: {subject}

Generate {content_type} content STRICTLY for "{topic}" ONLY. Focus exclusively on the provided topic and ensure all content is accurate, relevant, and directly related to "{topic}". DO NOT include any concepts from other subjects or unrelated topics."""

CHAT_SYSTEM_PROMPT = """You are a helpful AI study assistant focused ONLY on the specific topic provided by the user.

CRITICAL: Only discuss topics directly related to: "{topic}"
Subject context: {subject}

You specialize in helping with:
- Study planning and organization for the specific topic
- Explaining concepts ONLY related to the given topic
- Creating practice questions ONLY about the given topic
- Providing study tips ONLY for the specific subject area

Be encouraging, concise, and educational. Always stay focused on the specific topic provided."""

CONTENT_PROMPTS: dict[ContentType, ChatPromptTemplate] = {
    content_type: ChatPromptTemplate.from_messages([
        ("system", f"{TOPIC_ANCHOR_PROMPT}\n\n{template}"),
        ("human", GENERATION_USER_PROMPT),
    ])
    for content_type, template in CONTENT_TEMPLATES.items()
}

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", CHAT_SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{message}"),
])


def build_generation_messages(
    content_type: ContentType,
    topic: str,
    difficulty: Difficulty,
    count: int,
    subject: str | None = None,
) -> list[BaseMessage]:
    """
    Render system and user messages for a content generation request.

    Args:
        content_type: Requested content type
        topic: Sanitized topic
        difficulty: Difficulty level
        count: Number of items (flashcards, questions)
        subject: Optional sanitized subject context

    Returns:
        list[BaseMessage]: [system, human]
    """
    return CONTENT_PROMPTS[content_type].invoke({
        "topic": topic,
        "difficulty": difficulty.value,
        "count": count,
        "subject": subject or "general",
        "content_type": content_type.value,
    }).to_messages()


def build_chat_messages(
    message: str,
    history: list[tuple[str, str]],
    subject: str | None = None,
) -> list[BaseMessage]:
    """
    Render chat messages with prior turns as context.

    Args:
        message: Sanitized user message
        history: (role, content) pairs, oldest first
        subject: Optional sanitized subject context

    Returns:
        list[BaseMessage]: system, history turns, then the new message
    """
    history_messages: list[BaseMessage] = [
        HumanMessage(content=content) if role == "user" else AIMessage(content=content)
        for role, content in history
    ]
    return CHAT_PROMPT.invoke({
        "topic": message,
        "subject": subject or "general",
        "history": history_messages,
        "message": message,
    }).to_messages()
