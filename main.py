import sys
import uuid
from typing import Optional, Sequence

import config as cfg
import data_loader
import model_builder
import reports
import solution_processor
import ufl_solver
import ufl_utils.logging as logging
from exceptions import UflError
from ufl_utils.context import set_context

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNKNOWN = 2


def run_pipeline(settings: cfg.SolverConfig, out=None):
    """file -> instance -> (MIP, LP) models -> solves -> report on out (stdout by default)."""
    out = out or sys.stdout
    logger = logging.getLogger(__name__)

    instance = data_loader.load_instance(settings.input_path)

    with ufl_solver.solver_session(settings) as env:
        mip, lp = model_builder.build_models(instance, env)
        try:
            print(reports.format_header(mip.model.NumBinVars), file=out)
            report, mip_stats, _ = ufl_solver.solve_and_report(mip, lp, settings)
            print(reports.format_report(report), file=out)
            logger.info("MIP cutting planes: %s", mip_stats.cut_counts or "none")

            violations = solution_processor.coverage_violations(mip, instance)
            if violations:
                logger.warning("Demand not covered for clients %s", sorted(violations))
            logger.info("Open facilities: %s", solution_processor.open_facilities(mip))

            if settings.report_dir:
                reports.write_report_csv(
                    settings.report_dir,
                    report,
                    solution_processor.flow_frame(mip, instance),
                    solution_processor.facility_frame(mip, instance),
                )
        finally:
            lp.dispose()
            mip.dispose()

    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        settings = cfg.update_from_env()
        if argv:
            settings.update(input_path=argv[0])
    except UflError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logging.setup(log_dir=settings.log_dir, level=settings.log_level)
    logger = logging.getLogger(__name__)
    set_context(run_id=uuid.uuid4().hex[:8])

    try:
        run_pipeline(settings)
    except UflError as e:
        logger.error("Error: %s", e)
        return EXIT_FAILURE
    except Exception:
        logger.exception("Error: Unknown exception caught!")
        return EXIT_UNKNOWN
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
