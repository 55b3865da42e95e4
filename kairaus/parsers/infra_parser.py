"""Line dispatcher for investigation files.

Every non-blank line is split on whitespace; the first token is the record
code and the rest are positional parameters:

    FO, KJ                  file-level format and spatial reference
    OM ML OR TY PK TT LA    investigation header lines, written into the
    XY LN GR GL AT AL       investigation currently being built
    ZP TP LP
    HM TX HT EM             annotations for the most recent observation
    LB RK                   lab results for the most recent sample
    -1                      terminator: closes the investigation
    <number> ...            data row for the method set by TT

Anything else is ignored. Line order matters: "current investigation",
"most recent observation" and "active method" are all defined by position.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterable, Sequence

from kairaus.analysis.soil_layers import compute_properties
from kairaus.config import NUMERIC_ROW_RE, TERMINATOR_CODE
from kairaus.errors import StructuralError
from kairaus.models.infra_file import FileInfo, InfraFile
from kairaus.models.investigation import Investigation
from kairaus.models.observation import GrainSize, LabOther, LabResult, Observation, is_sample
from kairaus.models.parsed import ParsedField, field_at
from kairaus.models.vocabulary import (
    decode_classification,
    decode_coordinate_system,
    decode_date,
    decode_digitized,
    decode_elevation_system,
    decode_float,
    decode_initial_bore,
    decode_int,
    decode_method,
    decode_sampler,
    decode_str,
    decode_termination,
)
from kairaus.parsers.observation_rows import build_values

logger = logging.getLogger(__name__)

Params = Sequence[str]


def annotation_target(investigation: Investigation) -> Observation | None:
    """The observation that annotation and lab lines modify: the last one added."""
    return investigation.last_observation


class InfraParser:
    """Accumulates one file's investigations from its lines.

    In lenient mode (the default) structurally misplaced lines are logged
    and skipped. In strict mode they raise ``StructuralError`` and the file
    is not parsed.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.infra = InfraFile()
        self.investigation = Investigation()
        self._line_number = 0
        self._line = ""
        self._handlers: dict[str, Callable[[Params], None]] = {
            "FO": self._parse_fo,
            "KJ": self._parse_kj,
            "OM": self._parse_om,
            "ML": self._parse_ml,
            "OR": self._parse_or,
            "TY": self._parse_ty,
            "PK": self._parse_pk,
            "TT": self._parse_tt,
            "LA": self._parse_la,
            "XY": self._parse_xy,
            "LN": self._parse_ln,
            "GR": self._parse_gr,
            "GL": self._parse_gl,
            "AT": self._parse_at,
            "AL": self._parse_al,
            "ZP": self._parse_zp,
            "TP": self._parse_tp,
            "LP": self._parse_lp,
            "HM": self._parse_hm,
            "TX": self._parse_tx,
            "HT": self._parse_ht,
            "EM": self._parse_em,
            "LB": self._parse_lb,
            "RK": self._parse_rk,
            TERMINATOR_CODE: self._parse_end,
        }

    def parse(
        self,
        lines: Iterable[str],
        encoding: str | None = None,
        path: str | None = None,
    ) -> InfraFile:
        """Parse all lines and return the finished file."""
        self.infra.file_info = FileInfo(path=path, encoding=encoding)

        for number, line in enumerate(lines, start=1):
            self.feed(line, number)

        return self.finish()

    def feed(self, line: str, line_number: int | None = None) -> None:
        """Dispatch a single line."""
        tokens = line.split()
        if not tokens:
            return
        self._line_number = line_number if line_number is not None else self._line_number + 1
        self._line = line.rstrip("\r\n")

        code, params = tokens[0], tokens[1:]
        handler = self._handlers.get(code)
        if handler is not None:
            handler(params)
        elif NUMERIC_ROW_RE.match(code):
            self._parse_observation_row(tokens)
        else:
            logger.debug("Ignoring line %d with unknown record code %r", self._line_number, code)

    def finish(self) -> InfraFile:
        """Drop any unterminated investigation and compute derived properties."""
        if self.investigation != Investigation():
            logger.warning(
                "Dropping investigation without terminator line (%d observations)",
                len(self.investigation.observations),
            )
        self.investigation = Investigation()

        for inv in self.infra.investigations:
            inv.file_info = dataclasses.replace(self.infra.file_info)
            inv.spatial = dataclasses.replace(self.infra.spatial)
            compute_properties(inv)
        return self.infra

    def _misuse(self, message: str) -> None:
        if self.strict:
            raise StructuralError(message, self._line_number, self._line)
        logger.warning("Skipping line %d: %s", self._line_number, message)

    # --- file level --------------------------------------------------------

    def _parse_fo(self, params: Params) -> None:
        fmt = self.infra.format
        fmt.version = field_at(params, 0, decode_str)
        fmt.used_software = field_at(params, 1, decode_str)
        fmt.software_version = field_at(params, 2, decode_str)

    def _parse_kj(self, params: Params) -> None:
        spatial = self.infra.spatial
        spatial.coordinate_system = field_at(params, 0, decode_coordinate_system)
        spatial.elevation_system = field_at(params, 1, decode_elevation_system)

    # --- investigation header ---------------------------------------------

    def _parse_om(self, params: Params) -> None:
        self.investigation.organisations.owner_name = field_at(params, 0, decode_str)

    def _parse_or(self, params: Params) -> None:
        self.investigation.organisations.investigator_name = field_at(params, 0, decode_str)

    def _parse_ml(self, params: Params) -> None:
        self.investigation.classification.name = field_at(params, 0, decode_classification)

    def _parse_ty(self, params: Params) -> None:
        work = self.investigation.work
        work.id = field_at(params, 0, decode_str)
        work.name = field_at(params, 1, decode_str)

    def _parse_pk(self, params: Params) -> None:
        record = self.investigation.record
        record.number = field_at(params, 0, decode_int)
        record.driller = field_at(params, 1, decode_str)
        record.inspector = field_at(params, 2, decode_str)
        record.processor = field_at(params, 3, decode_str)
        record.digitized = field_at(params, 4, decode_digitized)
        record.condition = field_at(params, 5, decode_str)

    def _parse_tt(self, params: Params) -> None:
        method = self.investigation.method
        method.token = field_at(params, 0, decode_method)
        method.category = field_at(params, 1, decode_int)
        method.id = field_at(params, 2, decode_str)
        method.standard = field_at(params, 3, decode_str)
        method.sampler = field_at(params, 4, decode_sampler)
        method.specifier = field_at(params, 5, decode_str)

    def _parse_la(self, params: Params) -> None:
        equipment = self.investigation.equipment
        equipment.number = field_at(params, 0, decode_int)
        equipment.description = field_at(params, 1, decode_str)
        equipment.cone_size = field_at(params, 2, decode_str)

    def _parse_xy(self, params: Params) -> None:
        coords = self.investigation.coordinates
        coords.x = field_at(params, 0, decode_float)
        coords.y = field_at(params, 1, decode_float)
        coords.start_elevation = field_at(params, 2, decode_float)
        coords.date = field_at(params, 3, decode_date)
        coords.point_id = field_at(params, 4, decode_str)

    def _parse_ln(self, params: Params) -> None:
        line = self.investigation.line
        line.name = field_at(params, 0, decode_str)
        line.stake = field_at(params, 1, decode_float)
        line.distance = field_at(params, 2, decode_float)

    def _parse_gr(self, params: Params) -> None:
        program = self.investigation.program
        program.name = field_at(params, 0, decode_str)
        program.date = field_at(params, 1, decode_date)
        program.author = field_at(params, 2, decode_str)

    def _parse_gl(self, params: Params) -> None:
        self.investigation.program.guide.append(field_at(params, 0, decode_str))

    def _parse_at(self, params: Params) -> None:
        sample = self.investigation.depthless_rock_sample
        sample.attribute = field_at(params, 0, decode_str)
        sample.value = field_at(params, 1, decode_str)

    def _parse_al(self, params: Params) -> None:
        borehole = self.investigation.initial_borehole
        borehole.depth = field_at(params, 0, decode_float)
        borehole.method = field_at(params, 1, decode_initial_bore)
        borehole.soil_type = field_at(params, 2, decode_str)

    def _parse_zp(self, params: Params) -> None:
        pipe = self.investigation.standpipe
        pipe.top_elevation = field_at(params, 0, decode_float)
        pipe.ground_elevation = field_at(params, 1, decode_float)
        pipe.protection_top_elevation = field_at(params, 2, decode_float)
        pipe.cover_elevation = field_at(params, 3, decode_float)
        pipe.sieve_bottom_elevation = field_at(params, 4, decode_float)

    def _parse_tp(self, params: Params) -> None:
        pipe = self.investigation.standpipe
        pipe.upper_structure = field_at(params, 0, decode_str)
        pipe.sieve_length = field_at(params, 1, decode_float)
        pipe.sieve_type = field_at(params, 2, decode_str)
        pipe.diameter = field_at(params, 3, decode_float)
        pipe.material = field_at(params, 4, decode_str)

    def _parse_lp(self, params: Params) -> None:
        pipe = self.investigation.standpipe
        pipe.measure_point = field_at(params, 0, decode_str)
        pipe.details = field_at(params, 1, decode_str)
        pipe.locked = field_at(params, 2, decode_str)
        pipe.lock_owner = field_at(params, 3, decode_str)
        pipe.installer = field_at(params, 4, decode_str)

    # --- terminator ---------------------------------------------------------

    def _parse_end(self, params: Params) -> None:
        self.investigation.termination.token = field_at(params, 0, decode_termination)
        self.infra.investigations.append(self.investigation)
        self.investigation = Investigation()

    # --- annotations --------------------------------------------------------
    # The whole parameter list is one text entry. Without an observation yet,
    # notes and texts belong to the investigation itself.

    def _parse_hm(self, params: Params) -> None:
        text = ParsedField.parsed(" ".join(params))
        target = annotation_target(self.investigation)
        (target.notes if target else self.investigation.notes).append(text)

    def _parse_tx(self, params: Params) -> None:
        text = ParsedField.parsed(" ".join(params))
        target = annotation_target(self.investigation)
        (target.free_text if target else self.investigation.free_text).append(text)

    def _parse_ht(self, params: Params) -> None:
        text = ParsedField.parsed(" ".join(params))
        target = annotation_target(self.investigation)
        (target.hidden_text if target else self.investigation.hidden_text).append(text)

    def _parse_em(self, params: Params) -> None:
        target = annotation_target(self.investigation)
        if target is not None:
            target.unofficial_soil_type.append(ParsedField.parsed(" ".join(params)))

    # --- lab results --------------------------------------------------------

    def _parse_lb(self, params: Params) -> None:
        self._attach_lab_result(LabOther(
            attribute=field_at(params, 0, decode_str),
            result=field_at(params, 1, decode_str),
            unit=field_at(params, 2, decode_str),
        ))

    def _parse_rk(self, params: Params) -> None:
        self._attach_lab_result(GrainSize(
            grain_mm=field_at(params, 0, decode_float),
            pass_percent=field_at(params, 1, decode_float),
        ))

    def _attach_lab_result(self, result: LabResult) -> None:
        target = annotation_target(self.investigation)
        if target is None:
            self._misuse("lab result without an observation to attach to")
            return
        if not is_sample(target.values):
            self._misuse(f"cannot attach lab result to non-sample {target.token.value} observation")
            return
        target.values.lab_results.append(result)

    # --- data rows ----------------------------------------------------------

    def _parse_observation_row(self, tokens: Params) -> None:
        method = self.investigation.method.token
        if method.is_missing:
            self._misuse("data row before any method line")
            return
        if method.is_fallback:
            self._misuse(f"data row for unknown method {method.raw!r}")
            return
        self.investigation.observations.append(Observation(values=build_values(method.value, tokens)))


def parse_lines(
    lines: Iterable[str],
    *,
    encoding: str | None = None,
    path: str | None = None,
    strict: bool = False,
) -> InfraFile:
    """Parse already-decoded lines into an InfraFile."""
    return InfraParser(strict=strict).parse(lines, encoding=encoding, path=path)
