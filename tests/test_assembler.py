"""Tests for document assembly."""

import logging

import pytest

from mission_report.exceptions import BlockTooTallError, NoRoundsError
from mission_report.layout import DocumentAssembler, ImageResolver, generate
from mission_report.layout.assembler import (
    NO_CHART_MESSAGE,
    NO_PHOTO_MESSAGE,
    NO_ROUND_DATA_MESSAGE,
    NO_SHOTS_MESSAGE,
    SHOTS_CONTINUED_CAPTION,
)
from mission_report.layout.blocks import BlockKind
from mission_report.models import MissionReportData, RoundRecord, ShotRecord
from mission_report.report_options import ReportOptions

from conftest import make_noise_png, make_png, make_shots


def body(commands):
    return [c for c in commands if c.kind is not BlockKind.FOOTER]


def with_rounds(data, *rounds):
    return MissionReportData(
        pilot_name=data.pilot_name,
        instructor_name=data.instructor_name,
        date=data.date,
        mission_type=data.mission_type,
        aircraft=data.aircraft,
        rounds=rounds,
    )


@pytest.fixture
def assembler(options, fonts):
    return DocumentAssembler(options=options, fonts=fonts, resolver=ImageResolver())


class TestDocumentStructure:
    def test_page_count(self, assembler, sample_data, options, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        # cover + one page per round + informational pages
        assert document.page_count == 1 + 2 + len(options.info_pages)
        assert len(document.pages()) == document.page_count

    def test_rounds_start_on_new_pages_in_order(self, assembler, sample_data, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        headers = [c for c in document.commands if c.kind is BlockKind.SECTION_HEADER]
        assert [(c.page, c.payload.title) for c in headers] == [(1, "Round 1"), (2, "Round 2")]
        assert all(c.y == 50 for c in headers)

    def test_cover_cards(self, assembler, sample_data, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        cards = [c for c in document.pages()[0] if c.kind is BlockKind.CARD_ROW]
        assert [c.payload.title for c in cards] == ["PILOT", "INSTRUCTOR", "TRAINING DETAILS"]
        pilot, instructor, details = cards
        assert pilot.y == instructor.y
        assert instructor.x > pilot.x
        assert "Name: Jane Doe" in pilot.payload.lines
        assert "Date: 15/03/2024" in details.payload.lines
        assert "Total Rounds: 2" in details.payload.lines
        assert "Mission Name: Red Flag" in details.payload.lines

    def test_missing_pilot_photo_becomes_placeholder(self, assembler, sample_data, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        placeholders = [c for c in document.pages()[0] if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_PHOTO_MESSAGE]
        assert any("pilot photo" in note for note in document.substitutions)

    def test_pilot_photo_scaled_into_box(self, options, fonts, sample_data, generated_on):
        data = MissionReportData(
            pilot_name="Jane Doe", instructor_name="John Roe", date="2024-03-15",
            mission_type="Air Combat", aircraft="Rafale",
            pilot_photo=sample_data.rounds[0].chart_image, rounds=sample_data.rounds,
        )
        document = DocumentAssembler(options, fonts=fonts).assemble(data, generated_on=generated_on)
        (photo,) = [c for c in document.pages()[0] if c.kind is BlockKind.IMAGE]
        assert photo.width <= options.photo_max_width
        assert photo.height <= options.photo_max_height
        assert photo.width / photo.height == pytest.approx(2.0)

    def test_shot_table_rows(self, assembler, sample_data, options, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        cells = [c for c in document.pages()[1] if c.kind is BlockKind.TABLE_ROW]
        # header plus three shots, five columns each
        assert len(cells) == 4 * 5
        assert [c.payload.text for c in cells[:5]] == options.shot_columns
        first_row = [c.payload.text for c in cells[5:10]]
        assert first_row == ["1", "350", "1200.5", "800", "YES"]
        assert cells[9].payload.fill == options.color("hit")
        assert cells[14].payload.fill == options.color("miss")

    def test_every_page_has_one_footer(self, assembler, sample_data, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        total = document.page_count
        for index, page in enumerate(document.pages()):
            footers = [c for c in page if c.kind is BlockKind.FOOTER]
            assert len(footers) == 1
            footer = footers[0].payload
            assert footer.left == "Generated on 15/03/2024"
            assert footer.center == "ARESIA"
            assert footer.right == f"Page {index + 1} / {total}"

    def test_content_stays_above_footer(self, assembler, sample_data, options, generated_on):
        document = assembler.assemble(sample_data, generated_on=generated_on)
        limit = options.margin_top + options.content_height
        for command in body(document.commands):
            assert command.y + command.height <= limit + 1e-9


class TestLongTables:
    def test_table_continues_with_repeated_header(self, assembler, sample_data, options, generated_on):
        data = with_rounds(sample_data, RoundRecord(1, sample_data.rounds[0].chart_image, make_shots(40)))
        document = assembler.assemble(data, generated_on=generated_on)

        assert document.page_count == 1 + 2 + len(options.info_pages)
        continuation_page = body(document.pages()[2])
        caption, header = continuation_page[0], continuation_page[1]
        assert caption.kind is BlockKind.TEXT
        assert caption.payload.lines == (SHOTS_CONTINUED_CAPTION,)
        assert header.kind is BlockKind.TABLE_ROW
        assert header.payload.text == "SHOT NUMBER"
        assert header.payload.bold

        first_cells = [
            c for c in document.commands
            if c.kind is BlockKind.TABLE_ROW and c.x == options.margin_left and not c.payload.bold
        ]
        assert [c.payload.text for c in first_cells] == [str(i) for i in range(1, 41)]

    def test_positions_monotonic(self, assembler, sample_data, generated_on):
        data = with_rounds(sample_data, RoundRecord(1, sample_data.rounds[0].chart_image, make_shots(60)))
        document = assembler.assemble(data, generated_on=generated_on)
        positions = [(c.page, c.y) for c in body(document.commands)]
        assert positions == sorted(positions)


class TestSubstitution:
    def test_missing_chart_and_shots_yield_single_placeholder(self, assembler, sample_data, generated_on):
        data = with_rounds(sample_data, RoundRecord(number=1))
        document = assembler.assemble(data, generated_on=generated_on)
        round_page = body(document.pages()[1])
        assert [c.kind for c in round_page] == [BlockKind.SECTION_HEADER, BlockKind.PLACEHOLDER]
        assert round_page[1].payload.message == NO_ROUND_DATA_MESSAGE

    def test_missing_chart_with_shots(self, assembler, sample_data, generated_on):
        data = with_rounds(sample_data, RoundRecord(number=1, shots=make_shots(2)))
        document = assembler.assemble(data, generated_on=generated_on)
        placeholders = [c for c in document.pages()[1] if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_CHART_MESSAGE]

    def test_chart_without_shots(self, assembler, sample_data, generated_on):
        data = with_rounds(sample_data, RoundRecord(1, sample_data.rounds[0].chart_image))
        document = assembler.assemble(data, generated_on=generated_on)
        kinds = [c.kind for c in body(document.pages()[1])]
        assert BlockKind.IMAGE in kinds
        assert BlockKind.TABLE_ROW not in kinds
        placeholders = [c for c in document.pages()[1] if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_SHOTS_MESSAGE]

    def test_undecodable_chart_is_logged_and_replaced(self, assembler, sample_data, generated_on, caplog):
        data = with_rounds(sample_data, RoundRecord(1, b"definitely not a png", make_shots(2)))
        with caplog.at_level(logging.WARNING, logger="mission_report.layout.assembler"):
            document = assembler.assemble(data, generated_on=generated_on)
        placeholders = [c for c in document.pages()[1] if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_CHART_MESSAGE]
        assert any(note.startswith("round 1 chart") for note in document.substitutions)
        assert "round 1 chart" in caplog.text

    def test_missing_chart_file(self, options, fonts, sample_data, generated_on, tmp_path):
        resolver = ImageResolver(base_dir=str(tmp_path))
        data = with_rounds(sample_data, RoundRecord(1, "nowhere.png", make_shots(1)))
        document = DocumentAssembler(options, fonts=fonts, resolver=resolver).assemble(
            data, generated_on=generated_on
        )
        messages = [c.payload.message for c in document.commands if c.kind is BlockKind.PLACEHOLDER]
        assert NO_CHART_MESSAGE in messages


class TestErrors:
    def test_zero_rounds(self, assembler, sample_data):
        with pytest.raises(NoRoundsError):
            assembler.assemble(with_rounds(sample_data))

    def test_block_too_tall_propagates(self, fonts, sample_data):
        options = ReportOptions(placeholder_height=800)
        with pytest.raises(BlockTooTallError):
            DocumentAssembler(options, fonts=fonts).assemble(sample_data)


def test_generate_is_idempotent(sample_data, options, fonts, generated_on):
    first = generate(sample_data, options, resolver=ImageResolver(), generated_on=generated_on, fonts=fonts)
    second = generate(sample_data, options, resolver=ImageResolver(), generated_on=generated_on, fonts=fonts)
    assert first.commands == second.commands
    assert first.page_count == second.page_count


def test_brand_name_from_options(sample_data, fonts, generated_on):
    document = generate(sample_data, ReportOptions(brand_name="ACME"), generated_on=generated_on, fonts=fonts)
    footers = [c for c in document.commands if c.kind is BlockKind.FOOTER]
    assert {c.payload.center for c in footers} == {"ACME"}


class TestStatusColumnStyling:
    def test_one_hit_two_misses_without_chart(self, assembler, sample_data, options, generated_on):
        shots = (
            ShotRecord(number=1, speed=350, altitude=1200, distance=800, hit=True),
            ShotRecord(number=2, speed=340, altitude=1150, distance=760, hit=False),
            ShotRecord(number=3, speed=330, altitude=1100, distance=720, hit=False),
        )
        data = with_rounds(sample_data, RoundRecord(number=1, shots=shots))
        document = assembler.assemble(data, generated_on=generated_on)
        round_page = document.pages()[1]

        placeholders = [c for c in round_page if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_CHART_MESSAGE]

        cells = [c for c in round_page if c.kind is BlockKind.TABLE_ROW]
        rows = [cells[i:i + 5] for i in range(0, len(cells), 5)]
        assert len(rows) == 4
        status = [row[options.shot_status_column].payload for row in rows[1:]]
        assert [s.text for s in status] == ["YES", "NO", "NO"]
        assert [s.fill for s in status] == [options.color("hit"), options.color("miss"), options.color("miss")]
        assert all(s.text_color == options.color("white") for s in status)


class TestImageCachePerRun:
    def test_default_resolver_is_fresh_for_each_run(self, options, fonts, sample_data, chart_file, generated_on):
        assembler = DocumentAssembler(options, fonts=fonts)
        data = with_rounds(sample_data, RoundRecord(1, str(chart_file), make_shots(1)))

        def chart_size(document):
            (image,) = [c for c in document.pages()[1] if c.kind is BlockKind.IMAGE]
            return image.payload.intrinsic_width, image.payload.intrinsic_height

        assert chart_size(assembler.assemble(data, generated_on=generated_on)) == (400, 200)
        chart_file.write_bytes(make_png(100, 300))
        assert chart_size(assembler.assemble(data, generated_on=generated_on)) == (100, 300)

    def test_explicit_resolver_is_used(self, options, fonts, sample_data, generated_on):
        resolver = ImageResolver()
        DocumentAssembler(options, fonts=fonts, resolver=resolver).assemble(sample_data, generated_on=generated_on)
        assert resolver.resolve(sample_data.rounds[0].chart_image).width == 400


class TestCorruptImages:
    def test_truncated_chart_becomes_placeholder(self, assembler, sample_data, tmp_path, generated_on):
        png = make_noise_png()
        truncated = tmp_path / "truncated.png"
        truncated.write_bytes(png[:len(png) // 2])
        data = with_rounds(sample_data, RoundRecord(1, str(truncated), make_shots(2)))

        document = assembler.assemble(data, generated_on=generated_on)

        kinds = [c.kind for c in document.pages()[1]]
        assert BlockKind.IMAGE not in kinds
        placeholders = [c for c in document.pages()[1] if c.kind is BlockKind.PLACEHOLDER]
        assert [c.payload.message for c in placeholders] == [NO_CHART_MESSAGE]
        assert any(note.startswith("round 1 chart") for note in document.substitutions)


def test_contact_page_links_use_link_style(assembler, sample_data, options, generated_on):
    document = assembler.assemble(sample_data, generated_on=generated_on)
    last_page = document.pages()[-1]
    links = [
        c for c in last_page
        if c.kind is BlockKind.TEXT and c.payload.lines[0].startswith("https://")
    ]
    assert links
    assert all(c.payload.color == options.style("link").color for c in links)
