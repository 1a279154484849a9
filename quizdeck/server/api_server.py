"""FastAPI server exposing the quiz player to a browser."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from quizdeck.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quizdeck.core.answer_key import correct_indices, format_correct_answer
from quizdeck.core.errors import (
    CatalogEmpty,
    CatalogUnavailable,
    EmptyQuestionSet,
    InvalidChoice,
    NotActive,
    QuestionSetUnavailable,
)
from quizdeck.core.markdown_math_renderer import renderer
from quizdeck.core.models import SessionState
from quizdeck.core.quiz_manager import QuizManager

_PLAYER_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>QuizDeck</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; }
      .hidden { display: none; }
      .options-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 0.75rem; }
      button { border: none; border-radius: 0.75rem; padding: 0.85rem 1.25rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
      button:disabled { opacity: 0.6; cursor: not-allowed; }
      button.correct { background: #16a34a; }
      button.wrong { background: #dc2626; }
      #feedback { min-height: 1.25rem; }
      .nav { display: flex; gap: 0.75rem; justify-content: space-between; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src=\"https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js\"></script>
  </head>
  <body>
    <section class=\"card\">
      <select id=\"quiz-select\"><option value=\"\">Select a quiz…</option></select>
      <p id=\"status\"></p>
    </section>
    <section class=\"card hidden\" id=\"quiz-card\">
      <p id=\"progress\"></p>
      <div id=\"question\"></div>
      <div id=\"options\" class=\"options-grid\"></div>
      <p id=\"feedback\"></p>
      <div class=\"nav\">
        <button id=\"prev\">Previous</button>
        <button id=\"next\">Next</button>
      </div>
    </section>
    <section class=\"card hidden\" id=\"results-card\">
      <h2>Results</h2>
      <p id=\"summary\"></p>
      <ul id=\"breakdown\"></ul>
      <button id=\"retry\">Try Again</button>
    </section>
    <script>
      const el = (id) => document.getElementById(id);
      const post = (path, body) => fetch(path, {
        method: 'POST', headers: { 'Content-Type': 'application/json' }, body: JSON.stringify(body || {}),
      });

      async function loadCatalog() {
        const resp = await fetch('/catalog');
        const data = await resp.json();
        if (!resp.ok) { el('status').textContent = data.detail; return; }
        data.entries.forEach((entry) => {
          const opt = document.createElement('option');
          opt.value = entry.index;
          opt.textContent = entry.category ? `${entry.category} / ${entry.title}` : entry.title;
          el('quiz-select').appendChild(opt);
        });
      }

      async function render() {
        const resp = await fetch('/question');
        const data = await resp.json();
        el('quiz-card').classList.toggle('hidden', data.state !== 'active');
        el('results-card').classList.toggle('hidden', data.state !== 'completed');
        if (data.state === 'completed') return renderResults();
        if (data.state !== 'active') return;
        el('progress').textContent = data.progress;
        el('question').innerHTML = data.question_html;
        el('options').innerHTML = '';
        data.options.forEach((text, i) => {
          const btn = document.createElement('button');
          btn.textContent = text;
          btn.disabled = data.answered;
          if (data.answered && data.correct_indices.includes(i)) btn.classList.add('correct');
          else if (data.answered && data.chosen_index === i) btn.classList.add('wrong');
          btn.addEventListener('click', async () => { await post('/answer', { selected_option_index: i }); render(); });
          el('options').appendChild(btn);
        });
        if (!data.options.length) el('feedback').textContent = 'This question has no options to choose from.';
        else if (!data.answered) el('feedback').textContent = '';
        else el('feedback').textContent = data.is_correct ? 'Correct!' : `Wrong. Correct answer: ${data.correct_answer}`;
        el('prev').disabled = data.index === 0;
        el('next').textContent = data.is_last ? 'Show Results' : 'Next';
        if (window.MathJax && MathJax.typesetPromise) MathJax.typesetPromise();
      }

      async function renderResults() {
        const data = await (await fetch('/results')).json();
        el('summary').textContent = `Total: ${data.total_questions} | Correct: ${data.score} | ${Math.round(data.percentage)}%`
          + (data.best_score ? ` | Best so far: ${data.best_score.score} / ${data.best_score.total_questions}` : '');
        el('breakdown').innerHTML = '';
        data.breakdown.forEach((item) => {
          const li = document.createElement('li');
          const verdict = item.answered ? (item.is_correct ? 'correct' : 'wrong') : 'not answered';
          li.textContent = `${item.index + 1}. ${item.question_text} (${verdict})`;
          el('breakdown').appendChild(li);
        });
      }

      el('quiz-select').addEventListener('change', async (e) => {
        if (e.target.value === '') return;
        el('status').textContent = 'Loading quiz…';
        const resp = await post('/quiz', { catalog_index: Number(e.target.value) });
        const data = await resp.json();
        el('status').textContent = resp.ok ? data.title : data.detail;
        render();
      });
      el('prev').addEventListener('click', async () => { await post('/prev'); render(); });
      el('next').addEventListener('click', async () => { await post('/next'); render(); });
      el('retry').addEventListener('click', async () => { await post('/reset'); render(); });

      loadCatalog().then(render);
    </script>
  </body>
</html>
"""


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    selected_option_index: int


class SelectQuizPayload(BaseModel):
    """Payload schema for choosing a quiz from the catalog."""

    catalog_index: int


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _state_name(state: SessionState) -> str:
    return state.name.lower()


def _results_payload(manager: QuizManager) -> dict[str, object]:
    results = manager.get_results()
    best = manager.get_best_score()
    return {
        "title": manager.get_quiz_title(),
        "total_questions": results.total_questions,
        "score": results.score,
        "percentage": results.percentage,
        "breakdown": [
            {
                "index": outcome.index,
                "question_text": outcome.question_text,
                "chosen_index": outcome.chosen_index,
                "is_correct": outcome.is_correct,
                "answered": outcome.answered,
            }
            for outcome in results.breakdown
        ],
        "best_score": (
            {"score": best.score, "total_questions": best.total_questions}
            if best is not None
            else None
        ),
    }


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""

    app = FastAPI(title="QuizDeck API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_player_page() -> str:
        return _PLAYER_PAGE_HTML

    @app.get("/catalog")
    def get_catalog(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        catalog = manager.get_catalog()
        if catalog is None:
            catalog = _load_catalog(manager)
        return {
            "entries": [
                {"index": index, "title": entry.title, "category": entry.category}
                for index, entry in enumerate(catalog.entries)
            ]
        }

    @app.post("/catalog/reload")
    def reload_catalog(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        catalog = _load_catalog(manager)
        return {"count": len(catalog)}

    @app.post("/quiz", status_code=201)
    def select_quiz(
        payload: SelectQuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            installed = manager.select_quiz(payload.catalog_index)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except QuestionSetUnavailable as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except EmptyQuestionSet as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        if not installed:
            raise HTTPException(status_code=409, detail="A newer quiz selection replaced this one.")
        return {
            "title": manager.get_quiz_title(),
            "question_count": manager.get_question_count(),
        }

    @app.get("/question")
    def get_question(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        state = manager.get_state()
        if state is not SessionState.ACTIVE:
            return {"state": _state_name(state)}

        try:
            question = manager.get_current_question()
            progress = manager.get_progress_label()
        except NotActive:
            # The session moved on between the two reads.
            return {"state": _state_name(manager.get_state())}
        answer = manager.get_current_answer()
        answered = answer is not None
        return {
            "state": _state_name(state),
            "index": manager.get_current_index(),
            "progress": progress,
            "is_last": manager.is_last_question(),
            "question_html": renderer.render_fragment(question.text),
            "options": list(question.options),
            "answered": answered,
            "chosen_index": answer.chosen_index if answered else None,
            "is_correct": answer.is_correct if answered else None,
            "correct_indices": sorted(correct_indices(question)) if answered else [],
            "correct_answer": format_correct_answer(question) if answered else None,
            "explanation": question.explanation if answered else None,
        }

    @app.post("/answer", status_code=201)
    def submit_answer(
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            record = manager.submit_answer(payload.selected_option_index)
        except InvalidChoice as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except NotActive as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {
            "question_index": record.question_index,
            "chosen_index": record.chosen_index,
            "is_correct": record.is_correct,
            "submitted_at": record.submitted_at.isoformat(),
            "score": manager.get_score(),
        }

    @app.post("/next")
    def advance(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            state = manager.advance()
        except NotActive as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"state": _state_name(state), "index": manager.get_current_index()}

    @app.post("/prev")
    def retreat(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            index = manager.retreat()
        except NotActive as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"state": _state_name(manager.get_state()), "index": index}

    @app.post("/reset")
    def reset(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            manager.reset_quiz_progress()
        except NotActive as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"state": _state_name(manager.get_state()), "index": manager.get_current_index()}

    @app.get("/results")
    def get_results(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            return _results_payload(manager)
        except NotActive as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    return app


def _load_catalog(manager: QuizManager):
    try:
        return manager.load_catalog()
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except CatalogEmpty as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""

    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
