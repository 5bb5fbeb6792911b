"""Resolution of raw detections to albums in the user's collection.

The resolver is stateless across events apart from its configuration, so it
can run against whatever index is current, including one that is still being
loaded. A partial index simply yields more Unresolved outcomes.
"""

from typing import TYPE_CHECKING

from attrs import define, field, validators

from src.config import get_logger
from src.domain.entities.album import Album, Track
from src.domain.entities.detection import DetectionEvent, ResolvedPlay

from .algorithms import MATCHING_CONFIG
from .protocols import SimilarityScorer
from .types import NoCandidates, Unresolved

if TYPE_CHECKING:
    from src.domain.collection.index import CollectionIndex

logger = get_logger(__name__)

ResolutionResult = ResolvedPlay | Unresolved


@define(frozen=True, slots=True)
class DetectionResolver:
    """Maps a DetectionEvent to an owned Album (and Track) or Unresolved.

    Scoring of album and track titles uses the index's own scorer and weights,
    so a custom scorer configured on the collection applies to both levels.
    """

    acceptance_threshold: float = field(
        default=MATCHING_CONFIG["acceptance_threshold"],
        validator=[validators.ge(0.0), validators.le(1.0)],
    )

    def resolve(self, event: DetectionEvent, index: "CollectionIndex") -> ResolutionResult:
        """Resolve one detection against the collection.

        Album matching uses the album hint when the recognizer supplied one,
        otherwise the song title. Track matching is attempted only when the
        song title differs from the matched album's title.
        """
        if event.is_silence:
            return Unresolved(reason="silence")

        match = index.find_best_title_match(event.album_text, event.artist)
        if isinstance(match, NoCandidates):
            logger.debug(
                "No candidates for detection",
                title=event.title,
                collection_size=len(index),
            )
            return Unresolved(reason="no_candidates")

        if match.score > self.acceptance_threshold:
            logger.debug(
                f"Detection '{event.title}' by '{event.artist}' too dissimilar "
                f"to '{match.album.title}' ({match.score:.3f})"
            )
            return Unresolved(
                reason="below_threshold",
                best_album_id=match.album.id,
                best_score=match.score,
            )

        return ResolvedPlay(
            album_id=match.album.id,
            confidence=float(match.score),
            track=self._resolve_track(event, match.album, index.scorer),
        )

    def _resolve_track(
        self,
        event: DetectionEvent,
        album: Album,
        scorer: SimilarityScorer,
    ) -> Track | None:
        """Best-scoring track on the album, if it clears the threshold."""
        if not album.tracks or not event.title:
            return None

        # Song title indistinguishable from the album title: nothing to match
        if scorer(event.title, album.title) == 0.0:
            return None

        best_track: Track | None = None
        best_score = MATCHING_CONFIG["worst_score"]
        for track in album.tracks:
            track_score = scorer(event.title, track.title)
            if best_track is None or track_score < best_score:
                best_track, best_score = track, track_score

        if best_track is None or best_score > self.acceptance_threshold:
            return None
        return best_track
