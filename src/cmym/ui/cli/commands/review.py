"""Review command implementation."""

from typing import final

from cmym.application.services import ReviewRequest, ReviewService, ReviewSummary
from cmym.config.settings import COVER_ART_REMOTE
from cmym.features.coverart import FilePreview, ImagePreviewPort, NullPreview
from cmym.ui.cli.args.options import ReviewArgs
from cmym.ui.cli.display import RichReviewUI, SummaryDisplay


@final
class ReviewCommand:
    """Run an interactive review for one music directory."""

    def __init__(self, args: ReviewArgs) -> None:
        self.args: ReviewArgs = args
        self.ui: RichReviewUI = RichReviewUI()
        preview: ImagePreviewPort = (
            FilePreview(args.preview_file) if args.preview_file is not None else NullPreview()
        )
        self.service: ReviewService = ReviewService(self.ui, preview)

    def request(self) -> ReviewRequest:
        return ReviewRequest(
            music_root=self.args.music_path,
            snapshot_path=self.args.snapshot,
            save_tags=self.args.save,
            rename_root=self.args.rename_root,
            stage_ids=self.args.stages,
            remote_artwork=COVER_ART_REMOTE and not self.args.offline,
        )

    def execute(self) -> ReviewSummary:
        summary = self.service.run(self.request())
        if not self.args.quiet:
            SummaryDisplay().show(summary)
        return summary
