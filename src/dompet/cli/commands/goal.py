"""Savings goal commands."""

import click
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from dompet.domain.goal import GoalService


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.option("--name", required=True, help="Goal name")
@click.option("--target", required=True, help="Target amount")
@click.option("--target-date", required=True, help="Date the target should be reached")
@click.option("--current", default="0", help="Amount already saved")
@click.pass_context
def create_goal(ctx, name: str, target: str, target_date: str, current: str):
    """Create a savings goal."""
    service = GoalService(ctx.obj["db"])
    try:
        goal_id = service.create_goal(
            name=name,
            target_amount=parse_amount_or_exit(ctx, target),
            target_date=parse_date_or_exit(ctx, target_date, "target date"),
            current_amount=parse_amount_or_exit(ctx, current),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created goal {goal_id}: {name} (link as goal_{goal_id})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    goals = GoalService(ctx.obj["db"]).list_goals()
    if not goals:
        click.echo("No goals found.")
        return

    click.echo(f"{'ID':<6} {'Name':<25} {'Saved':>15} {'Target':>15} {'Progress':>9} Target date")
    click.echo("-" * 90)
    for goal in goals:
        click.echo(
            f"{goal.id:<6} {goal.name[:25]:<25} {goal.current_amount:>15,.2f} "
            f"{goal.target_amount:>15,.2f} {goal.progress:>8.1f}% {goal.target_date}"
        )


@goal_group.command("adjust")
@click.argument("goal_id", type=int)
@click.option("--amount", required=True, help="New saved amount")
@click.pass_context
def adjust_goal(ctx, goal_id: int, amount: str):
    """Set the saved amount of a goal without recording a transaction."""
    service = GoalService(ctx.obj["db"])
    try:
        goal = service.adjust_goal(goal_id, current_amount=parse_amount_or_exit(ctx, amount))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Goal {goal.id} now has {goal.current_amount:,.2f} saved ({goal.progress:.1f}%)")


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.option("--amount", required=True, help="Amount to save")
@click.option("--fund-source", required=True, help="Fund source the money comes from")
@click.option("--date", default="today", show_default=True, help="Transaction date")
@click.option("--description", help="Transaction description")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str, fund_source: str, date: str, description: str | None):
    """Save money towards a goal (records a linked expense)."""
    service = GoalService(ctx.obj["db"])
    try:
        transaction_id = service.contribute(
            goal_id,
            amount=parse_amount_or_exit(ctx, amount),
            date=parse_date_or_exit(ctx, date),
            fund_source=fund_source,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    goal = service.require_goal(goal_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"Goal {goal.id} now has {goal.current_amount:,.2f} saved ({goal.progress:.1f}%)")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool):
    """Delete a goal. Its transactions are kept."""
    if not yes and not click.confirm(f"Are you sure you want to delete goal {goal_id}?"):
        click.echo("Deletion cancelled.")
        return
    try:
        GoalService(ctx.obj["db"]).delete_goal(goal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli: click.Group) -> None:
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
