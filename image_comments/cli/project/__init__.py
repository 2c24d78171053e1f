import json
import logging
from gettext import gettext as _
from pathlib import Path

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTION = _("Print the pixel position of each comment for a frame size")


def command(subparser):
    subparser.add_argument("comments", type=Path, help=_("JSON comment list"))
    subparser.add_argument("--width", type=float, required=True)
    subparser.add_argument("--height", type=float, required=True)
    subparser.add_argument(
        "--json", dest="as_json", action="store_true", help=_("Print JSON instead of text")
    )

    def handle(args):
        from image_comments.core.annotation import AnnotationSession, Frame
        from image_comments.core.annotation.utils import compute_annotation_statistics

        session = AnnotationSession()
        session.load_comments(json.loads(args.comments.read_text()))
        frame = Frame(width=args.width, height=args.height)

        projections = session.resize(frame)
        if projections is None:
            raise SystemExit(_("Frame size must be positive"))
        logger.info(
            _("Loaded comments: {stats}").format(
                stats=compute_annotation_statistics(list(session.annotations))
            )
        )

        if args.as_json:
            print(json.dumps([dict(id=a.id, **rect.to_dict()) for a, rect in projections], indent=2))
            return
        for annotation, rect in projections:
            print(
                f"{annotation.id}\t{annotation.selection.type}\t"
                f"{rect.x:.1f}\t{rect.y:.1f}\t{rect.width:.1f}\t{rect.height:.1f}\t"
                f"{annotation.comment}"
            )

    return handle
