"""Plain text / markdown rendering of a pipeline run."""

from __future__ import annotations

from pension720.services.pipeline_service import PipelineResult
from pension720.services.recommendation_service import Ticket

FORMATS = ("md", "plain")
TITLE = "연금복권720+ 빈도 기반 추천 (대형 순환 / 무작위 X)"
DISCLAIMER = "과거 빈도는 미래 당첨을 보장하지 않습니다."


def format_ticket_line(ticket: Ticket, fmt: str = "md") -> str:
    if fmt == "plain":
        second = ", ".join(f"{g}조" for g in ticket.alternate_groups)
        return f"{ticket.group}조 {ticket.number}  (2등: {second} / 3등: {ticket.suffix})"

    second = " · ".join(f"{g}조 {ticket.number}" for g in ticket.alternate_groups)
    return "\n".join(
        [
            f"- **{ticket.group}조 {ticket.number}**",
            f"  - 2등(조만 변경): {second}",
            f"  - 3등(끝 5자리): `{ticket.suffix}`",
        ]
    )


def _sections(result: PipelineResult) -> list[tuple[int, list[Ticket]]]:
    sections = sorted(result.tiers.items())
    if result.tickets and len(result.tickets) not in result.tiers:
        sections.insert(0, (len(result.tickets), result.tickets))
    return sections


def render_summary(result: PipelineResult) -> str:
    rounds = result.table.rounds
    return (
        f"rounds={rounds.count} min={rounds.min if rounds.min is not None else '-'} "
        f"max={rounds.max if rounds.max is not None else '-'} fetched={result.fetched_count}"
    )


def render_report(result: PipelineResult, fmt: str = "md") -> str:
    """Render tickets (if any) with the data range they were derived from."""

    table = result.table
    sections = _sections(result)
    if not sections:
        return render_summary(result)

    max_round = table.rounds.max if table.rounds.max is not None else "-"
    generated_at = table.updated_at.isoformat()

    if fmt == "plain":
        lines = [
            TITLE,
            f"기준 데이터: 누적 {table.rounds.count}회 (최대 회차: {max_round})",
            f"생성 시각: {generated_at}",
            f"cycle: {result.cycle}",
        ]
        for n, tickets in sections:
            lines.append("")
            lines.append(f"[{n}개 추천]")
            lines.extend(format_ticket_line(t, "plain") for t in tickets)
        lines.append("")
        lines.append(DISCLAIMER)
        return "\n".join(lines)

    lines = [
        f"## {TITLE}",
        "",
        f"- 기준 데이터: 누적 {table.rounds.count}회 (최대 회차: {max_round})",
        f"- 생성 시각: {generated_at}",
        f"- cycle: {result.cycle}",
    ]
    for n, tickets in sections:
        lines.append("")
        lines.append(f"### ✅ {n}개 추천")
        lines.append("\n".join(format_ticket_line(t, "md") for t in tickets))
    lines.append("")
    lines.append(f"> {DISCLAIMER}")
    return "\n".join(lines)
